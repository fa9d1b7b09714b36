# File: robots_scout/groups.py
"""Resolution of user-agent groups.

A group is a maximal run of consecutive :class:`~robots_scout.records.UserAgent`
records.  Runs are kept as tuples of record positions; names are looked up
from the sequence on demand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from robots_scout.records import Record, UserAgent

__all__ = ("AgentGroups", "resolve_groups")

Run = Tuple[int, ...]


@dataclass(frozen=True, slots=True)
class AgentGroups:
    """Группы user-agent, построенные по неизменяемой последовательности записей."""

    runs: Tuple[Run, ...]
    _run_by_position: Dict[int, Run]
    _names_by_position: Dict[int, str]
    _groups_by_name: Dict[str, Tuple[str, ...]]

    def run_of(self, position: int) -> Run:
        """Run containing the user-agent at *position* (singleton if unknown)."""
        return self._run_by_position.get(position, (position,))

    def names_of_run(self, run: Run) -> Tuple[str, ...]:
        return tuple(self._names_by_position[p] for p in run if p in self._names_by_position)

    def owner_group(self, position: int) -> Tuple[str, ...]:
        """Names in the group whose first agent sits at *position*."""
        return self.names_of_run(self.run_of(position))

    def group_of(self, name: str) -> Tuple[str, ...]:
        """All names sharing a run with *name*, always including *name* itself."""
        return self._groups_by_name.get(name, (name,))

    def as_mapping(self) -> Dict[str, Tuple[str, ...]]:
        return dict(self._groups_by_name)


def _collect_runs(records: Sequence[Record]) -> List[Run]:
    runs: List[Run] = []
    current: List[int] = []
    for position, record in enumerate(records):
        if record.kind == UserAgent.kind:
            # an unrecognised line between agents splits the run in the parser
            if current and record.group is not None and record.group != current[0]:  # type: ignore[union-attr]
                runs.append(tuple(current))
                current = []
            current.append(position)
            continue
        if current:
            runs.append(tuple(current))
            current = []
    if current:
        runs.append(tuple(current))
    return runs


def resolve_groups(records: Sequence[Record]) -> AgentGroups:
    """Build :class:`AgentGroups` in a single pass over *records*.

    A name declared in several runs resolves to the union of those runs,
    in order of first appearance.
    """
    runs = _collect_runs(records)
    run_by_position: Dict[int, Run] = {}
    names_by_position: Dict[int, str] = {}
    groups_by_name: Dict[str, Dict[str, None]] = {}

    for run in runs:
        names = [records[p].name for p in run]  # type: ignore[union-attr]
        for position, name in zip(run, names):
            run_by_position[position] = run
            names_by_position[position] = name
        for name in names:
            bucket = groups_by_name.setdefault(name, {})
            bucket.update(dict.fromkeys(names))

    return AgentGroups(
        runs=tuple(runs),
        _run_by_position=run_by_position,
        _names_by_position=names_by_position,
        _groups_by_name={name: tuple(group) for name, group in groups_by_name.items()},
    )
