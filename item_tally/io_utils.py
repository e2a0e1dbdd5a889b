from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator, List
import csv, glob

from item_tally.counters import FrequencyTable

def expand_globs(patterns: List[str]) -> List[Path]:
    files = []
    for pat in patterns:
        files.extend(Path(p) for p in glob.glob(pat, recursive=True))
    return sorted({p.resolve() for p in files if p.is_file()})

def iter_items(paths: Iterable[Path]) -> Iterator[str]:
    """One item per line; blank lines skipped. Read errors are not caught."""
    for p in paths:
        with p.open("r", encoding="utf-8") as f:
            for line in f:
                item = line.rstrip("\r\n")
                if item:
                    yield item

def save_table_csv(path: Path, table: FrequencyTable):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        w = csv.writer(f)
        w.writerow(["item", "count"])
        for item, c in table.most_common():
            w.writerow([item, c])

def write_summary(path: Path, lines: list[str]):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines), encoding="utf-8")
