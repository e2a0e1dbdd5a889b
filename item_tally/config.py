from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, TypedDict

import yaml

from item_tally.counters import DEFAULT_CHUNK_SIZE


class GroupDef(TypedDict):
    files: list[str]


class ParallelDef(TypedDict):
    enabled: bool
    executor: str        # "thread" or "process"
    workers: Optional[int]
    chunk_size: int


class Config(TypedDict, total=False):
    # One of these may be provided in YAML; internally we normalize to "groups".
    group: Dict[str, Any]
    groups: Dict[str, GroupDef]

    out_dir: str
    parallel: ParallelDef


_PARALLEL_DEFAULTS: Dict[str, Any] = {
    "enabled": False,
    "executor": "thread",
    "workers": None,
    "chunk_size": DEFAULT_CHUNK_SIZE,
}


def normalize_groups(cfg: dict) -> dict:
    """
    Normalize single-group sugar 'group' into 'groups'.
    After normalization, cfg['groups'] must exist and be a mapping.
    """
    if "groups" in cfg and cfg["groups"] is not None:
        return cfg

    if "group" in cfg and cfg["group"]:
        g = cfg["group"]
        if not isinstance(g, dict):
            raise ValueError("'group' must be a mapping.")
        name = g.get("name", "items")
        files = g.get("files")

        if not files:
            raise ValueError("'group.files' is required.")
        if not isinstance(files, list) or not all(isinstance(x, str) for x in files):
            raise ValueError("'group.files' must be list[str].")

        cfg["groups"] = {name: {"files": files}}
        return cfg

    raise ValueError("Config must define 'groups' or 'group'.")


def _validate_groups(groups: Any) -> None:
    if not isinstance(groups, dict):
        raise ValueError("Config 'groups' must be a mapping.")
    for k, v in groups.items():
        if not isinstance(k, str) or not k:
            raise ValueError("Group name must be a non-empty string.")
        if k == "ALL":
            raise ValueError("Group name 'ALL' is reserved for the combined table.")
        if not isinstance(v, dict) or "files" not in v:
            raise ValueError(f"Group '{k}' must have 'files' list.")
        files = v["files"]
        if not isinstance(files, list) or not all(isinstance(x, str) for x in files):
            raise ValueError(f"Group '{k}' must have 'files' as list[str].")


def _is_positive_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool) and x >= 1


def normalize_parallel(pp: Any) -> ParallelDef:
    """Validate the optional 'parallel' section and fill in defaults."""
    if pp is None:
        return dict(_PARALLEL_DEFAULTS)  # type: ignore[return-value]
    if not isinstance(pp, dict):
        raise ValueError("'parallel' must be a mapping.")

    unknown = set(pp) - set(_PARALLEL_DEFAULTS)
    if unknown:
        raise ValueError(f"Unknown 'parallel' keys: {sorted(unknown)}")

    out = {**_PARALLEL_DEFAULTS, **pp}
    if not isinstance(out["enabled"], bool):
        raise ValueError("'parallel.enabled' must be a boolean.")
    if out["executor"] not in {"thread", "process"}:
        raise ValueError(
            f"Unsupported parallel.executor: {out['executor']!r} (use 'thread' or 'process')."
        )
    if out["workers"] is not None and not _is_positive_int(out["workers"]):
        raise ValueError("'parallel.workers' must be a positive integer or null.")
    if not _is_positive_int(out["chunk_size"]):
        raise ValueError("'parallel.chunk_size' must be a positive integer.")
    return out  # type: ignore[return-value]


def load_config(path: Path) -> Config:
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    if path.suffix.lower() not in {".yml", ".yaml"}:
        raise ValueError("Config file must be YAML (.yml / .yaml)")

    text = path.read_text(encoding="utf-8")
    config_data = yaml.safe_load(text) or {}
    if not isinstance(config_data, dict):
        raise ValueError("Top-level YAML must be a mapping.")

    # Normalize and validate groups/group
    config_data = normalize_groups(config_data)
    _validate_groups(config_data["groups"])

    config_data["parallel"] = normalize_parallel(config_data.get("parallel"))

    return config_data  # type: ignore[return-value]
