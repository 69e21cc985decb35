#!/usr/bin/env python3
"""
Uniformity audit for generator streams.

Draws a deterministic stream from a label-derived seed, buckets it, and
reports a chi-square statistic against the uniform expectation.

Usage:
    python -m scripts.audit_stream --kind u32 --samples 100000 --seed AUDIT_2025 --out out/audit_u32.csv
    python -m scripts.audit_stream --kind bool --samples 50000 --seed AUDIT_2025 --out out/audit_bool.csv

bool audits always use two buckets (True, False); --buckets is ignored.
"""
import argparse
import csv
import json
import logging
import subprocess
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from purerand.config import settings
from purerand.config_hash import get_config_hash
from purerand.errors import GeneratorError
from purerand.logic.generator import Generator
from purerand.logic.mixing import MASK32, MASK64
from purerand.seeding import seed_from_label
from purerand.validators import validate_audit_params


logger = logging.getLogger(__name__)

KINDS = ("u32", "u64", "bool", "f64")


@dataclass
class AuditStats:
    """Statistics accumulated during an audit run."""
    kind: str = "u32"
    samples: int = 0
    buckets: int = 0
    counts: list[int] = field(default_factory=list)
    total: float = 0.0  # sum of samples normalised to [0, 1)
    final_seed: int = 0

    @property
    def mean(self) -> float:
        return self.total / self.samples if self.samples > 0 else 0.0

    @property
    def degrees_of_freedom(self) -> int:
        return max(1, self.buckets - 1)


def get_git_commit() -> str:
    """Get current git commit hash (short)."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            cwd=Path(__file__).parent.parent,
            timeout=5,
        )
        if result.returncode == 0:
            return result.stdout.strip()
    except (subprocess.TimeoutExpired, FileNotFoundError):
        pass
    return "unknown"


def get_timestamp_iso() -> str:
    """Get ISO 8601 UTC timestamp."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def calculate_chi_square(counts: list[int], expected: float) -> float:
    """Pearson chi-square of observed bucket counts against a flat expectation."""
    if expected <= 0:
        return 0.0
    return sum((count - expected) ** 2 / expected for count in counts)


def _draw(generator: Generator, kind: str) -> tuple[Generator, float]:
    """Draw one sample of the given kind, normalised to [0, 1)."""
    if kind == "u32":
        generator, raw = generator.next_u32()
        return generator, raw / (MASK32 + 1)
    if kind == "u64":
        generator, raw = generator.next_u64()
        return generator, raw / (MASK64 + 1)
    if kind == "bool":
        generator, flag = generator.next_bool()
        return generator, 0.0 if flag else 0.5
    if kind == "f64":
        return generator.next_f64()
    raise ValueError(f"Unknown kind: {kind}")


def run_audit(
    kind: str,
    samples: int,
    buckets: int,
    seed_str: str,
    verbose: bool = False,
) -> AuditStats:
    """
    Run a headless uniformity audit.

    Args:
        kind: 'u32', 'u64', 'bool' or 'f64'
        samples: Number of values to draw
        buckets: Number of equal-width buckets over [0, 1)
        seed_str: Seed label for reproducibility
        verbose: Log progress

    Returns:
        AuditStats with bucket counts and the final generator seed
    """
    if kind not in KINDS:
        raise ValueError(f"Unknown kind: {kind}")
    if kind == "bool":
        # True lands in bucket 0, False in bucket 1
        buckets = 2
    validate_audit_params(samples, buckets)

    generator = Generator.new(seed_from_label(seed_str))
    stats = AuditStats(kind=kind, buckets=buckets, counts=[0] * buckets)

    progress_interval = max(1, samples // 10)
    for index in range(samples):
        if verbose and index % progress_interval == 0:
            logger.info("Progress: %.1f%%", index / samples * 100)

        generator, unit = _draw(generator, kind)
        bucket = min(int(unit * buckets), buckets - 1)
        stats.counts[bucket] += 1
        stats.total += unit
        stats.samples += 1

    stats.final_seed = generator.current_seed
    return stats


def chi_square_for(stats: AuditStats) -> float:
    """Chi-square statistic of an audit against a flat distribution."""
    return calculate_chi_square(stats.counts, stats.samples / stats.buckets)


def generate_csv(seed_str: str, stats: AuditStats, output_path: str) -> None:
    """Write a single-row audit CSV."""
    chi_square = chi_square_for(stats)
    row = {
        "timestamp": get_timestamp_iso(),
        "git_commit": get_git_commit(),
        "config_hash": get_config_hash(),
        "kind": stats.kind,
        "samples": stats.samples,
        "buckets": stats.buckets,
        "seed": seed_str,
        "mean": f"{stats.mean:.6f}",
        "chi_square": f"{chi_square:.4f}",
        "degrees_of_freedom": stats.degrees_of_freedom,
        "final_seed": stats.final_seed,
        "counts": json.dumps(stats.counts, separators=(",", ":")),
    }

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=row.keys())
        writer.writeheader()
        writer.writerow(row)

    print(f"CSV written to: {output_path}")


def audit_passes(stats: AuditStats) -> bool:
    """True when chi-square stays under the configured ratio of its degrees of freedom."""
    return chi_square_for(stats) <= settings.audit_max_chi_square_ratio * stats.degrees_of_freedom


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Uniformity audit for generator streams")
    parser.add_argument(
        "--kind",
        choices=KINDS,
        default="u32",
        help="Value kind to audit",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=settings.audit_samples,
        help="Number of values to draw",
    )
    parser.add_argument(
        "--buckets",
        type=int,
        default=settings.audit_buckets,
        help="Number of equal-width buckets",
    )
    parser.add_argument(
        "--seed",
        type=str,
        default=settings.audit_seed,
        help="Seed label for reproducibility",
    )
    parser.add_argument(
        "--out",
        type=str,
        required=True,
        help="Output CSV path",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log progress",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print(f"Running audit: kind={args.kind}, samples={args.samples}, seed={args.seed}")
    print(f"Config hash: {get_config_hash()}")

    try:
        stats = run_audit(
            kind=args.kind,
            samples=args.samples,
            buckets=args.buckets,
            seed_str=args.seed,
            verbose=args.verbose,
        )
    except GeneratorError as e:
        print(e.to_body().model_dump_json())
        return 2

    generate_csv(seed_str=args.seed, stats=stats, output_path=args.out)

    chi_square = chi_square_for(stats)
    print(f"\nSummary:")
    print(f"  Samples: {stats.samples}")
    print(f"  Mean: {stats.mean:.6f}")
    print(f"  Chi-square: {chi_square:.4f} (dof={stats.degrees_of_freedom})")
    print(f"  Final seed: {stats.final_seed}")

    if not audit_passes(stats):
        print(
            f"ASSERTION FAILED: chi-square {chi_square:.4f} exceeds "
            f"{settings.audit_max_chi_square_ratio} x dof"
        )
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
