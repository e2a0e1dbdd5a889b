from __future__ import annotations
from typing import Mapping

from item_tally.counters import FrequencyTable, merge_tables

def compose_all(tables: Mapping[str, FrequencyTable]) -> FrequencyTable:
    return merge_tables(*tables.values())
