"""
Disjoint-set search over sorted letter masks.

Finds every 5-tuple of masks, picked at strictly increasing positions of
the sorted unique-mask sequence, whose masks are pairwise disjoint (their
OR has 25 bits set).

The search is bounded-depth backtracking with an accumulator of the
letters used so far. A mask that shares a bit with the accumulator is
pruned on the spot, and only positions after the current pick are
considered at the next level. Each level keeps the later masks that are
still disjoint from the accumulator, so the AND test for a candidate is
done once per level instead of being repeated in every deeper call.
Picking positions in increasing order means each combination is found
exactly once, never once per permutation.

The outer loop (the first pick) is split into independent branches:
- serial: one branch after another in the calling thread
- thread: ThreadPoolExecutor, one task per branch
- process: ProcessPoolExecutor, branches mapped in chunks; the mask
  tuple is sent to each worker once through the pool initializer
Each branch builds its own result list; the calling thread concatenates
them as futures complete.
"""

from __future__ import annotations

from concurrent.futures import (
    FIRST_COMPLETED,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    wait,
)
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import threading

DEPTH = 5
EXECUTORS = ("serial", "thread", "process")

Candidate = Tuple[int, int, int, int, int]


class SearchStats:
    """Thread-safe counters updated as outer branches finish."""
    def __init__(self, total_branches: int = 0):
        self._lock = threading.Lock()
        self.total_branches = total_branches
        self.branches_done = 0
        self.tuples_found = 0

    def record_branches(self, branches: int, tuples: int) -> None:
        with self._lock:
            self.branches_done += branches
            self.tuples_found += tuples

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return {
                'total_branches': self.total_branches,
                'branches_done': self.branches_done,
                'tuples_found': self.tuples_found,
            }


ProgressFn = Callable[[SearchStats], None]


def _descend(candidates: List[int], used: int, depth: int, picked: List[int], out: List[Candidate]) -> None:
    """Try every candidate as the next pick.

    `candidates` holds the masks after the previous pick, in sorted order,
    already known to be disjoint from `used`. `depth` counts the picks
    still to make after this one; 0 means this pick completes a tuple.
    """
    slot = DEPTH - 1 - depth
    if depth == 0:
        for m in candidates:
            picked[slot] = m
            out.append(tuple(picked))
        return
    # fewer than depth + 1 candidates left cannot complete a tuple
    last = len(candidates) - depth
    for k in range(last):
        m = candidates[k]
        picked[slot] = m
        acc = used | m
        rest = [c for c in candidates[k + 1:] if not c & acc]
        if len(rest) >= depth:
            _descend(rest, acc, depth - 1, picked, out)


def search_branch(masks: Sequence[int], start: int) -> List[Candidate]:
    """All tuples whose first pick is masks[start]."""
    first = masks[start]
    rest = [m for m in masks[start + 1:] if not m & first]
    out: List[Candidate] = []
    if len(rest) < DEPTH - 1:
        return out
    picked = [first, 0, 0, 0, 0]
    _descend(rest, first, DEPTH - 2, picked, out)
    return out


def search_range(masks: Sequence[int], start: int, end: int) -> List[Candidate]:
    """Concatenated branches for first picks in [start, end)."""
    out: List[Candidate] = []
    for i in range(start, end):
        out.extend(search_branch(masks, i))
    return out


def solve_serial(masks: Sequence[int], stats: Optional[SearchStats] = None,
                 on_progress: Optional[ProgressFn] = None) -> List[Candidate]:
    """Run every outer branch in the calling thread."""
    results: List[Candidate] = []
    for i in range(len(masks)):
        found = search_branch(masks, i)
        results.extend(found)
        if stats is not None:
            stats.record_branches(1, len(found))
            if on_progress is not None:
                on_progress(stats)
    return results


def _thread_branch(masks: Sequence[int], start: int, stats: Optional[SearchStats]) -> List[Candidate]:
    found = search_branch(masks, start)
    if stats is not None:
        stats.record_branches(1, len(found))
    return found


_WORKER_MASKS: Tuple[int, ...] = ()


def _init_process_worker(masks: Tuple[int, ...]) -> None:
    """Pool initializer: keep the read-only masks in the worker process."""
    global _WORKER_MASKS
    _WORKER_MASKS = masks


def _process_chunk(start: int, end: int) -> List[Candidate]:
    return search_range(_WORKER_MASKS, start, end)


def _chunk_bounds(n: int, chunksize: int) -> List[Tuple[int, int]]:
    chunksize = max(1, int(chunksize))
    return [(i, min(i + chunksize, n)) for i in range(0, n, chunksize)]


def solve_parallel(masks: Sequence[int], executor: str = "thread", max_workers: int = 4,
                   chunksize: int = 64, stats: Optional[SearchStats] = None,
                   on_progress: Optional[ProgressFn] = None) -> List[Candidate]:
    """Fan the outer branches out over a thread or process pool.

    Results are merged in the calling thread in completion order. On any
    exception (KeyboardInterrupt included) pending work is cancelled and
    the exception propagates.
    """
    if executor not in ("thread", "process"):
        raise ValueError(f"unknown executor: {executor!r}")
    n = len(masks)
    results: List[Candidate] = []
    if executor == "thread":
        pool = ThreadPoolExecutor(max_workers=max_workers)
        pending = {pool.submit(_thread_branch, masks, i, stats) for i in range(n)}
        sizes = None
    else:
        frozen = tuple(masks)
        pool = ProcessPoolExecutor(max_workers=max_workers, initializer=_init_process_worker,
                                   initargs=(frozen,))
        sizes = {}
        pending = set()
        for start, end in _chunk_bounds(n, chunksize):
            fut = pool.submit(_process_chunk, start, end)
            sizes[fut] = end - start
            pending.add(fut)
    try:
        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            for fut in done:
                found = fut.result()
                results.extend(found)
                if stats is not None:
                    if sizes is not None:
                        # process workers cannot reach our counters
                        stats.record_branches(sizes[fut], len(found))
                    if on_progress is not None:
                        on_progress(stats)
    except BaseException:
        pool.shutdown(wait=False, cancel_futures=True)
        raise
    pool.shutdown(wait=True)
    return results


def solve(masks: Sequence[int], executor: str = "thread", max_workers: int = 1,
          chunksize: int = 64, stats: Optional[SearchStats] = None,
          on_progress: Optional[ProgressFn] = None) -> List[Candidate]:
    """Find every pairwise-disjoint 5-tuple of masks.

    `masks` must be sorted and free of duplicates (AnagramIndex.masks).
    The returned tuples hold masks in pick order; the order of tuples
    across branches is unspecified.
    """
    if executor not in EXECUTORS:
        raise ValueError(f"unknown executor: {executor!r}")
    if stats is not None and not stats.total_branches:
        stats.total_branches = len(masks)
    if executor == "serial" or int(max_workers) <= 1 or len(masks) < DEPTH:
        return solve_serial(masks, stats, on_progress)
    return solve_parallel(masks, executor, int(max_workers), chunksize, stats, on_progress)
