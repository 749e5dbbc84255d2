"""
Five words, twenty-five letters.

Reads one or more word lists, keeps the five-letter words with five
distinct letters and prints every set of five such words that share no
letter.

- Usage: `fivewords.py WORDLIST [WORDLIST ...] [--workers N]
    [--executor serial|thread|process] [--config cfg.json] [--limit N]
    [--json] [--quiet]`
- Output: word counts, the number of solutions with the search time, then
    one block of five grid rows per solution (or one JSON document with
    `--json`).
- Logs: one JSON object per line on stderr (`--quiet` turns them off).
- Config: defaults < JSON file < `FIVEWORDS_<KEY>` environment < flags.
- Errors: an unreadable word list stops the run with exit status 1.
"""

import argparse
import json
import os
import sys
import time
from typing import Dict, List, Optional, Tuple

import psutil

from search import EXECUTORS, SearchStats, solve
from solutions import format_duration, materialize, total_count
from wordmask import AnagramIndex, build_index, normalize_line

ENV_PREFIX = 'FIVEWORDS_'
LOG_ENABLED = True


class WordListError(OSError):
    """A word list could not be read."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


def json_log(event: str, level: str = "info", **fields):
    """Best-effort JSON log to stderr."""
    if not LOG_ENABLED:
        return
    try:
        rec = {"ts": time.time(), "level": level, "event": event}
        rec.update(fields)
        print(json.dumps(rec, ensure_ascii=False), file=sys.stderr)
    except (OSError, ValueError, TypeError):
        pass


def load_wordlists(paths: List[str]) -> Tuple[List[str], int]:
    """Read words from every file in order; return (words, skipped_lines).

    Empty lines are ignored. Lines with anything but letters a-z after
    lower-casing are skipped and counted. A file that cannot be opened or
    decoded raises WordListError.
    """
    words: List[str] = []
    skipped = 0
    for path in paths:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                for line in f:
                    if not line.strip():
                        continue
                    w = normalize_line(line)
                    if w is None:
                        skipped += 1
                        continue
                    words.append(w)
        except UnicodeDecodeError as e:
            raise WordListError(path, f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise WordListError(path, e.strerror or str(e)) from e
    return words, skipped


def default_config() -> Dict[str, object]:
    return {
        "executor": "thread",
        "max_workers": psutil.cpu_count(logical=True) or 1,
        "chunksize": 64,
        "progress_every": 0,
    }


def _clampi(v, lo: int, hi: int) -> int:
    try:
        v = int(v)
    except (TypeError, ValueError):
        return lo
    return max(lo, min(hi, v))


def validate_config(cfg_in: dict) -> dict:
    """Clamp config values to safe ranges to avoid misuse."""
    out = dict(cfg_in)
    out['max_workers'] = _clampi(out.get('max_workers', 1), 1, 1024)
    out['chunksize'] = _clampi(out.get('chunksize', 64), 1, 100_000)
    out['progress_every'] = _clampi(out.get('progress_every', 0), 0, 1_000_000_000)
    ex = str(out.get('executor', 'thread')).strip().lower()
    out['executor'] = ex if ex in EXECUTORS else 'thread'
    return out


def apply_env_overrides(base: dict, env: Optional[Dict[str, str]] = None) -> dict:
    """Let FIVEWORDS_<KEY> environment variables override config values."""
    env = os.environ if env is None else env
    out = dict(base)
    for k in list(out.keys()):
        env_name = ENV_PREFIX + k.upper()
        if env_name in env and env[env_name] != '':
            out[k] = env[env_name]
    return out


def load_config(path: Optional[str] = None, env: Optional[Dict[str, str]] = None) -> dict:
    """Merge defaults, the optional JSON file and the environment."""
    cfg = default_config()
    if path:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                file_cfg = json.load(f)
            if not isinstance(file_cfg, dict):
                raise ValueError("config must be a JSON object")
            for k in cfg.keys():
                if k in file_cfg:
                    cfg[k] = file_cfg[k]
        except (OSError, ValueError) as e:
            print(f"[FIVEWORDS] Failed to load config {path}: {e}", file=sys.stderr)
            json_log("config_error", level="warning", path=path, error=str(e))
    return validate_config(apply_env_overrides(cfg, env))


def make_progress_logger(every: int):
    """Return an on_progress callback that logs every `every` branches, or None."""
    if every <= 0:
        return None
    state = {'next': every}

    def _log(stats: SearchStats):
        snap = stats.snapshot()
        if snap['branches_done'] >= state['next'] or snap['branches_done'] == snap['total_branches']:
            while state['next'] <= snap['branches_done']:
                state['next'] += every
            json_log("progress", done=snap['branches_done'], total=snap['total_branches'],
                     tuples=snap['tuples_found'])
    return _log


def render_text(index: AnagramIndex, solutions, total: int, elapsed_s: float,
                limit: Optional[int] = None) -> List[str]:
    lines = [
        f"Found {index.word_count} words with 5 unique characters",
        f"Found {len(index)} words with 5 unique characters excluding anagrams",
        f"Found {total} solutions in {format_duration(elapsed_s)}",
        "",
    ]
    shown = solutions if limit is None else solutions[:limit]
    for sol in shown:
        lines.extend(sol.rows(index))
        lines.append("")
    return lines


def render_json(index: AnagramIndex, solutions, total: int, elapsed_s: float,
                limit: Optional[int] = None) -> str:
    shown = solutions if limit is None else solutions[:limit]
    doc = {
        'words': index.word_count,
        'unique_masks': len(index),
        'solutions': total,
        'tuples_total': len(solutions),
        'elapsed_ms': round(elapsed_s * 1000.0, 3),
        'tuples': [s.to_dict(index) for s in shown],
    }
    return json.dumps(doc, ensure_ascii=False)


def run(paths: List[str], cfg: dict, limit: Optional[int] = None, as_json: bool = False) -> int:
    """Load, index, search and print. Returns the process exit status."""
    try:
        words, skipped = load_wordlists(paths)
    except WordListError as e:
        print(f"error: {e}", file=sys.stderr)
        json_log("wordlist_error", level="error", path=e.path, reason=e.reason)
        return 1
    json_log("loaded", words=len(words), skipped_lines=skipped, sources=len(paths))
    if skipped:
        print(f"[FIVEWORDS] skipped {skipped} lines with characters outside a-z", file=sys.stderr)

    index = build_index(words)
    json_log("indexed", candidates=index.word_count, unique_masks=len(index))

    stats = SearchStats(len(index.masks))
    json_log("search_start", executor=cfg['executor'], workers=cfg['max_workers'])
    t0 = time.perf_counter()
    candidates = solve(index.masks, executor=cfg['executor'], max_workers=cfg['max_workers'],
                       chunksize=cfg['chunksize'], stats=stats,
                       on_progress=make_progress_logger(int(cfg['progress_every'])))
    elapsed = time.perf_counter() - t0

    solutions = materialize(candidates)
    total = total_count(solutions, index)
    proc = psutil.Process()
    cpu = proc.cpu_times()
    json_log("search_done", tuples=len(solutions), solutions=total,
             elapsed_ms=round(elapsed * 1000.0, 3), branches=stats.snapshot()['branches_done'],
             rss_bytes=proc.memory_info().rss, cpu_user_s=cpu.user, cpu_system_s=cpu.system)

    if as_json:
        print(render_json(index, solutions, total, elapsed, limit))
    else:
        for line in render_text(index, solutions, total, elapsed, limit):
            print(line)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse flags, merge config and run the search."""
    global LOG_ENABLED
    ap = argparse.ArgumentParser(description="Find five words with twenty-five distinct letters.")
    ap.add_argument("wordlists", nargs='+', help="Word list files, one word per line.")
    ap.add_argument("--workers", type=int, help="Worker count. Default: logical CPUs.")
    ap.add_argument("--executor", choices=list(EXECUTORS),
                    help="How to run outer branches. Default: thread.")
    ap.add_argument("--config", help="Path to JSON config.")
    ap.add_argument("--limit", type=int, help="Print at most this many solution blocks.")
    ap.add_argument("--json", action="store_true", help="Print the report as JSON.")
    ap.add_argument("--quiet", action="store_true", help="No JSON log lines on stderr.")
    args = ap.parse_args(argv)

    LOG_ENABLED = not args.quiet
    cfg = load_config(args.config)
    if args.workers is not None:
        cfg['max_workers'] = args.workers
    if args.executor is not None:
        cfg['executor'] = args.executor
    cfg = validate_config(cfg)
    limit = None if args.limit is None else max(0, args.limit)

    try:
        return run(args.wordlists, cfg, limit=limit, as_json=args.json)
    except KeyboardInterrupt:
        print("interrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
