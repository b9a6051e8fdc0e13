"""Precedent chains and outcome conflicts per legal theme.

Chains: a theme with two or more cases, ordered chronologically (case date
is decision date, then filing date, then publication date; undated cases go
last). The narrative compares the outcome at the start of the chain with
the outcome at its end.

Conflicts: a theme whose cases split across two or more outcome groups.
Cases without a declared outcome fall into the "unknown" group.
"""

from datetime import datetime, timezone
from typing import Dict, List, Mapping

import structlog

from regintel_engine.data_management.schemas import (
    Conflict,
    ConflictPosition,
    PrecedentChain,
    Record,
    Theme,
)

_MIN_DATE = datetime.min.replace(tzinfo=timezone.utc)


def _chronological(cases: List[tuple[int, Record]]) -> List[Record]:
    ordered = sorted(
        cases,
        key=lambda item: (
            item[1].case_date() is None,
            item[1].case_date() or _MIN_DATE,
            item[0],
        ),
    )
    return [case for _, case in ordered]


def development_narrative(cases: List[Record]) -> str:
    """One sentence describing how outcomes moved across a chain."""
    start = cases[0].case_outcome()
    end = cases[-1].case_outcome()
    if start != end:
        return f'Jurisprudence shifted from "{start}" to "{end}" across {len(cases)} cases.'
    return f"Consistent jurisprudence across {len(cases)} cases."


class PrecedentAnalyzer:
    """Builds precedent chains and detects outcome conflicts.

    Both operations take themes already carrying related_cases and a lookup
    from case id to (corpus index, record).
    """

    def __init__(self) -> None:
        self._logger = structlog.get_logger().bind(component="PrecedentAnalyzer")

    @staticmethod
    def _members(
        theme: Theme,
        index: Mapping[str, tuple[int, Record]],
    ) -> List[tuple[int, Record]]:
        return [index[case_id] for case_id in theme.related_cases if case_id in index]

    def build_chains(
        self,
        themes: List[Theme],
        index: Mapping[str, tuple[int, Record]],
    ) -> List[PrecedentChain]:
        """Build one chain per theme with at least two cases.

        Args:
            themes: Themes with assigned cases.
            index: Case id to (corpus index, record).

        Returns:
            Chains in taxonomy order.
        """
        chains: List[PrecedentChain] = []
        for theme in themes:
            members = self._members(theme, index)
            if len(members) < 2:
                continue

            ordered = _chronological(members)
            chains.append(
                PrecedentChain(
                    theme_id=theme.id,
                    theme=theme.name,
                    case_ids=tuple(case.id for case in ordered),
                    development_narrative=development_narrative(ordered),
                )
            )

        self._logger.debug("precedent_chains_built", chains=len(chains))
        return chains

    def detect_conflicts(
        self,
        themes: List[Theme],
        index: Mapping[str, tuple[int, Record]],
    ) -> List[Conflict]:
        """Emit a conflict for each theme whose cases disagree on outcome.

        Args:
            themes: Themes with assigned cases.
            index: Case id to (corpus index, record).

        Returns:
            Conflicts in taxonomy order. Positions are grouped by outcome, in
            order of each outcome's first appearance.
        """
        conflicts: List[Conflict] = []
        for theme in themes:
            groups: Dict[str, List[Record]] = {}
            for _, case in self._members(theme, index):
                groups.setdefault(case.case_outcome(), []).append(case)

            if len(groups) < 2:
                continue

            positions = tuple(
                ConflictPosition(
                    case_id=case.id,
                    outcome_position=outcome,
                    jurisdiction=case.region(),
                )
                for outcome, cases in groups.items()
                for case in cases
            )
            conflicts.append(
                Conflict(theme_id=theme.id, theme=theme.name, positions=positions)
            )

        self._logger.debug("conflicts_detected", conflicts=len(conflicts))
        return conflicts
