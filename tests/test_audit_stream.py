"""
Tests for the audit_stream script.

Verifies bucketing, chi-square reporting and CSV output.
"""
import csv
import json

import pytest

from purerand.config import settings
from purerand.errors import ErrorCode, GeneratorError
from purerand.logic.generator import Generator
from purerand.seeding import seed_from_label
from scripts.audit_stream import (
    AuditStats,
    audit_passes,
    calculate_chi_square,
    chi_square_for,
    generate_csv,
    main,
    run_audit,
)


class TestCalculateChiSquare:
    """Tests for calculate_chi_square."""

    def test_flat_counts_score_zero(self):
        assert calculate_chi_square([10, 10, 10, 10], 10.0) == 0.0

    def test_known_value(self):
        # (15-10)^2/10 + (5-10)^2/10
        assert calculate_chi_square([15, 5], 10.0) == pytest.approx(5.0)

    def test_zero_expected(self):
        assert calculate_chi_square([0, 0], 0.0) == 0.0


class TestRunAudit:
    """Tests for run_audit."""

    def test_counts_cover_all_samples(self):
        stats = run_audit(kind="u32", samples=1000, buckets=8, seed_str="TEST")
        assert stats.samples == 1000
        assert sum(stats.counts) == 1000
        assert len(stats.counts) == 8

    def test_final_seed_matches_threaded_generator(self):
        stats = run_audit(kind="u32", samples=5, buckets=2, seed_str="TEST")
        g, _ = Generator.new(seed_from_label("TEST")).take_u32(5)
        assert stats.final_seed == g.current_seed

    def test_deterministic(self):
        first = run_audit(kind="f64", samples=500, buckets=4, seed_str="TEST")
        second = run_audit(kind="f64", samples=500, buckets=4, seed_str="TEST")
        assert first == second

    def test_bool_uses_two_buckets(self):
        stats = run_audit(kind="bool", samples=1000, buckets=16, seed_str="TEST")
        assert stats.buckets == 2
        assert stats.degrees_of_freedom == 1
        assert sum(stats.counts) == 1000

    def test_invalid_params_raise(self):
        with pytest.raises(GeneratorError) as exc_info:
            run_audit(kind="u32", samples=0, buckets=4, seed_str="TEST")
        assert exc_info.value.code == ErrorCode.INVALID_AUDIT_PARAMS

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            run_audit(kind="u16", samples=10, buckets=2, seed_str="TEST")


@pytest.mark.slow
class TestUniformity:
    """Coarse uniformity checks; thresholds sit far above chance fluctuation."""

    @pytest.mark.parametrize("kind", ["u32", "f64"])
    def test_buckets_roughly_flat(self, kind: str):
        stats = run_audit(kind=kind, samples=20000, buckets=16, seed_str="AUDIT_2025")
        assert chi_square_for(stats) < 5 * stats.degrees_of_freedom
        assert stats.mean == pytest.approx(0.5, abs=0.02)

    def test_bool_roughly_balanced(self):
        stats = run_audit(kind="bool", samples=20000, buckets=2, seed_str="AUDIT_2025")
        true_share = stats.counts[0] / stats.samples
        assert true_share == pytest.approx(0.5, abs=0.03)


class TestAuditPasses:
    """Tests for the pass/fail threshold."""

    def test_flat_passes(self):
        stats = AuditStats(kind="u32", samples=40, buckets=4, counts=[10, 10, 10, 10])
        assert audit_passes(stats)

    def test_skewed_fails(self):
        stats = AuditStats(kind="u32", samples=40, buckets=4, counts=[40, 0, 0, 0])
        assert not audit_passes(stats)


class TestGenerateCsv:
    """Tests for CSV output."""

    def test_writes_single_row(self, tmp_path):
        stats = run_audit(kind="u32", samples=100, buckets=4, seed_str="TEST")
        out = tmp_path / "nested" / "audit.csv"

        generate_csv(seed_str="TEST", stats=stats, output_path=str(out))

        with open(out, newline="") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 1
        row = rows[0]
        assert row["kind"] == "u32"
        assert row["samples"] == "100"
        assert row["seed"] == "TEST"
        assert len(row["config_hash"]) == 16
        assert json.loads(row["counts"]) == stats.counts
        assert int(row["final_seed"]) == stats.final_seed


class TestMain:
    """Tests for the command line entry point."""

    def test_success(self, tmp_path, monkeypatch):
        # Loose ceiling: this checks the CLI path, not the statistics
        monkeypatch.setattr(settings, "audit_max_chi_square_ratio", 100.0)
        out = tmp_path / "audit.csv"
        exit_code = main(
            ["--kind", "u32", "--samples", "4000", "--buckets", "4", "--seed", "CLI", "--out", str(out)]
        )
        assert exit_code == 0
        assert out.exists()

    def test_invalid_params_exit_2(self, tmp_path, capsys):
        out = tmp_path / "audit.csv"
        exit_code = main(["--samples", "0", "--out", str(out)])
        assert exit_code == 2
        assert "INVALID_AUDIT_PARAMS" in capsys.readouterr().out
        assert not out.exists()
