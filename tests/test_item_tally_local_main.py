from pathlib import Path
import csv
import sys

import pytest

# Make sure project root is on sys.path so we can import the script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import item_tally_local as mod


def _run_with_config(monkeypatch, cfg: dict) -> int:
    def fake_load_config(path: Path):
        # main() passes script_dir / "groups.config.yml" here
        assert path.name == "groups.config.yml"
        return cfg

    monkeypatch.setattr(mod, "load_config", fake_load_config)

    real_exists = Path.exists

    def fake_exists(self: Path) -> bool:
        if self.name == "groups.config.yml":
            return True
        return real_exists(self)

    monkeypatch.setattr(mod.Path, "exists", fake_exists)
    return mod.main()


def _read_csv(path: Path) -> list[list[str]]:
    with path.open(encoding="utf-8") as f:
        return list(csv.reader(f))


def _write_groups(tmp_path: Path) -> tuple[Path, Path]:
    g1 = tmp_path / "input" / "G1"
    g2 = tmp_path / "input" / "G2"
    g1.mkdir(parents=True)
    g2.mkdir(parents=True)
    (g1 / "a.txt").write_text(
        "China\nAustralia\nIndia\nUSA\nUSSR\nUK\nChina\n", encoding="utf-8"
    )
    (g2 / "b.txt").write_text(
        "France\nPoland\nAustria\nIndia\nUSA\nEgypt\nChina\n", encoding="utf-8"
    )
    return g1, g2


@pytest.mark.parametrize(
    "parallel",
    [
        {"enabled": False, "executor": "thread", "workers": None, "chunk_size": 10_000},
        {"enabled": True, "executor": "thread", "workers": 2, "chunk_size": 3},
    ],
)
def test_e2e_two_groups_creates_csvs_all_and_summary(tmp_path, monkeypatch, parallel):
    g1, g2 = _write_groups(tmp_path)
    out_dir = tmp_path / "output"
    cfg = {
        "out_dir": str(out_dir),
        "groups": {
            "G1": {"files": [str(g1 / "*.txt")]},
            "G2": {"files": [str(g2 / "*.txt")]},
        },
        "parallel": parallel,
    }

    rc = _run_with_config(monkeypatch, cfg)
    assert rc == 0

    g1_rows = _read_csv(out_dir / "item_frequency_G1.csv")
    assert g1_rows[0] == ["item", "count"]
    assert g1_rows[1] == ["China", "2"]

    all_rows = _read_csv(out_dir / "item_frequency_ALL.csv")
    all_counts = {item: int(c) for item, c in all_rows[1:]}
    assert all_counts == {
        "China": 3, "India": 2, "Australia": 1, "USA": 2, "USSR": 1,
        "UK": 1, "France": 1, "Poland": 1, "Austria": 1, "Egypt": 1,
    }
    assert all_rows[1] == ["China", "3"]

    summary = (out_dir / "summary.txt").read_text(encoding="utf-8")
    assert "ALL: unique=10 total=14" in summary
    assert "G1: unique=6 total=7" in summary
    assert "G2: unique=7 total=7" in summary


def test_e2e_group_without_files_is_skipped(tmp_path, monkeypatch, capsys):
    g1, _ = _write_groups(tmp_path)
    out_dir = tmp_path / "output"
    cfg = {
        "out_dir": str(out_dir),
        "groups": {
            "G1": {"files": [str(g1 / "*.txt")]},
            "EMPTY": {"files": [str(tmp_path / "none" / "*.txt")]},
        },
    }

    rc = _run_with_config(monkeypatch, cfg)
    assert rc == 0

    err = capsys.readouterr().err
    assert "[WARN] group 'EMPTY' matched no files" in err
    assert not (out_dir / "item_frequency_EMPTY.csv").exists()
    # only one group counted, so no combined table
    assert not (out_dir / "item_frequency_ALL.csv").exists()
    assert "G1: unique=6 total=7" in (out_dir / "summary.txt").read_text(encoding="utf-8")
