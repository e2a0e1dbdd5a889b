#!/usr/bin/env python3
from __future__ import annotations
from pathlib import Path
from typing import Dict

import sys
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from item_tally.config import load_config
from item_tally.io_utils import expand_globs, iter_items, save_table_csv, write_summary
from item_tally.counters import FrequencyTable, count_items, count_parallel
from item_tally.compose import compose_all

def main() -> int:
    script_dir = Path(__file__).resolve().parent
    config_path = script_dir / "groups.config.yml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    cfg = load_config(config_path)

    out_dir = Path(cfg.get("out_dir", "output"))
    out_dir.mkdir(parents=True, exist_ok=True)

    parallel = cfg.get("parallel") or {}
    use_parallel = bool(parallel.get("enabled", False))

    group_counts: Dict[str, FrequencyTable] = {}

    for gname, gdef in cfg["groups"].items():
        files = expand_globs(gdef["files"])
        if not files:
            print(f"[WARN] group '{gname}' matched no files; skipping", file=sys.stderr)
            continue
        mode = f"parallel/{parallel.get('executor', 'thread')}" if use_parallel else "serial"
        print(f"[Processing] {gname}: {len(files)} files ({mode})")
        items = iter_items(files)
        if use_parallel:
            table = count_parallel(
                items,
                chunk_size=parallel.get("chunk_size", 10_000),
                workers=parallel.get("workers"),
                executor=parallel.get("executor", "thread"),
            )
        else:
            table = count_items(items)
        group_counts[gname] = table
        save_table_csv(out_dir / f"item_frequency_{gname}.csv", table)

    if len(group_counts) >= 2:
        all_counts = compose_all(group_counts)
        group_counts["ALL"] = all_counts
        save_table_csv(out_dir / "item_frequency_ALL.csv", all_counts)

    lines = ["=== Summary ==="]
    for k in sorted(group_counts.keys()):
        t = group_counts[k]
        lines.append(f"{k}: unique={len(t)} total={t.total()}")
    write_summary(out_dir / "summary.txt", lines)

    print("[Done] Saved to", out_dir)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
