import argparse
import time
from statistics import mean

from fivewords import load_wordlists
from search import solve
from wordmask import build_index


def time_solve(masks, executor: str, workers: int, repeat: int, chunksize: int = 64):
    latencies = []
    found = None
    for _ in range(repeat):
        t0 = time.perf_counter()
        res = solve(masks, executor=executor, max_workers=workers, chunksize=chunksize)
        latencies.append(time.perf_counter() - t0)
        found = frozenset(frozenset(t) for t in res)
    return found, latencies


def run_benchmark(masks, workers_list, repeat: int, chunksize: int = 64):
    configs = [("serial", 1)]
    for ex in ("thread", "process"):
        for w in workers_list:
            configs.append((ex, w))
    rows = []
    reference = None
    for executor, workers in configs:
        found, latencies = time_solve(masks, executor, workers, repeat, chunksize)
        if reference is None:
            reference = found
        assert found == reference, f"{executor}/{workers} disagrees with serial"
        rows.append({
            'executor': executor,
            'workers': workers,
            'tuples': len(found),
            'avg_ms': mean(latencies) * 1000.0,
            'min_ms': min(latencies) * 1000.0,
            'max_ms': max(latencies) * 1000.0,
        })
    return rows


if __name__ == '__main__':
    ap = argparse.ArgumentParser()
    ap.add_argument('--wordlist', required=True, nargs='+')
    ap.add_argument('--workers', type=int, nargs='+', default=[2, 4])
    ap.add_argument('--repeat', type=int, default=3)
    ap.add_argument('--chunksize', type=int, default=64)
    args = ap.parse_args()
    words, _ = load_wordlists(args.wordlist)
    index = build_index(words)
    print({'words': index.word_count, 'unique_masks': len(index)})
    for row in run_benchmark(index.masks, args.workers, max(1, args.repeat), args.chunksize):
        print(row)
