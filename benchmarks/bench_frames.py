"""
Microbenchmark: time per full frame recompute vs number of charges.
Run:
  python benchmarks/bench_frames.py
"""
import time
import numpy as np
from efield_sim import Sandbox, SandboxConfig
from efield_sim.commands import AddCharge
from efield_sim.profiler import Profiler

def run(n: int, frames: int = 5):
    prof = Profiler()
    sandbox = Sandbox(config=SandboxConfig(), profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)
    b = sandbox.config.bounds
    for _ in range(n):
        x = float(rng.uniform(b.xmin + 50, b.xmax - 50))
        y = float(rng.uniform(b.ymin + 50, b.ymax - 50))
        q = float(rng.choice([-2.0, -1.0, 1.0, 2.0]))
        sandbox.dispatch(AddCharge((x, y), q))

    # warmup
    sandbox.recompute()
    prof.stats.clear()

    t0 = time.perf_counter()
    for _ in range(frames):
        sandbox.recompute()
    t1 = time.perf_counter()

    per_frame = (t1 - t0) / frames
    return per_frame, prof.stats.report()

if __name__ == "__main__":
    for n in [1, 2, 5, 10, 20]:
        per_frame, report = run(n)
        print(f"N={n:3d}  frame={1e3*per_frame:9.2f} ms  frames/s={1/per_frame:7.2f}")
        print(report)
        print()
