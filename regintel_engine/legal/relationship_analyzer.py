"""Pairwise legal case relationship scoring.

Strength of a pair, capped at 1.0:
- +0.2 per overlapping key issue. Issues overlap when one contains the other,
  ignoring case. The count is taken from whichever case has more overlapping
  issues, so the score does not depend on argument order.
- +0.4 and type citing when either summary contains the other's title
- +0.3 when both declare a legal basis and one contains the other
- +0.2 and type conflicting when key issues overlap but outcomes differ
- +0.1 when the case dates are less than 365 days apart

Type defaults to similar_facts. Pairs are kept only above the configured
minimum strength (0.3) and returned strongest first.

The corpus is indexed once and pairs are visited by index. With
relationship_bucket_by_theme enabled only cases sharing a theme are
compared, which bounds the quadratic stage to within-theme pairs.
"""

from typing import Iterable, List, Optional, Sequence

import structlog

from regintel_engine.config.engine_config import DEFAULT_CONFIG, EngineConfig
from regintel_engine.data_management.schemas import (
    CaseRelationship,
    Record,
    RelationshipType,
)

ISSUE_WEIGHT = 0.2
CITATION_WEIGHT = 0.4
LEGAL_BASIS_WEIGHT = 0.3
CONFLICT_WEIGHT = 0.2
DATE_PROXIMITY_WEIGHT = 0.1
DATE_PROXIMITY_DAYS = 365


def _issues(case: Record) -> List[str]:
    issues: List[str] = []
    for issue in case.key_issues:
        issue = issue.strip().lower()
        if issue and issue not in issues:
            issues.append(issue)
    return issues


def _overlapping(issues: Sequence[str], others: Sequence[str]) -> List[str]:
    """Issues contained in, or containing, at least one of the others."""
    return [
        issue for issue in issues
        if any(issue in other or other in issue for other in others)
    ]


class RelationshipAnalyzer:
    """Scores relationships between legal cases.

    Usage:
        analyzer = RelationshipAnalyzer()
        relationships = analyzer.find_relationships(cases)
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG) -> None:
        """Initialize RelationshipAnalyzer.

        Args:
            config: Engine configuration (minimum strength, theme bucketing).
        """
        self.config = config
        self._logger = structlog.get_logger().bind(component="RelationshipAnalyzer")

    def score_pair(self, case_a: Record, case_b: Record) -> Optional[CaseRelationship]:
        """Score one pair of cases.

        Args:
            case_a: First case.
            case_b: Second case.

        Returns:
            CaseRelationship when the strength exceeds the minimum, else None.
        """
        strength = 0.0
        relationship_type = RelationshipType.SIMILAR_FACTS
        reasons: List[str] = []

        issues_a = _issues(case_a)
        issues_b = _issues(case_b)
        # larger of the two directions so the score ignores argument order
        shared = max(
            len(_overlapping(issues_a, issues_b)),
            len(_overlapping(issues_b, issues_a)),
        )
        if shared:
            strength += ISSUE_WEIGHT * shared
            reasons.append(f"{shared} shared key issue(s)")

        if self._cites(case_a, case_b) or self._cites(case_b, case_a):
            strength += CITATION_WEIGHT
            relationship_type = RelationshipType.CITING
            reasons.append("one case cites the other")

        basis_a = (case_a.legal_basis or "").strip().lower()
        basis_b = (case_b.legal_basis or "").strip().lower()
        if basis_a and basis_b and (basis_a in basis_b or basis_b in basis_a):
            strength += LEGAL_BASIS_WEIGHT
            reasons.append("shared legal basis")

        if shared and case_a.case_outcome() != case_b.case_outcome():
            strength += CONFLICT_WEIGHT
            relationship_type = RelationshipType.CONFLICTING
            reasons.append(
                f"divergent outcomes ({case_a.case_outcome()} vs {case_b.case_outcome()})"
            )

        date_a = case_a.case_date()
        date_b = case_b.case_date()
        if date_a and date_b and abs((date_a - date_b).days) < DATE_PROXIMITY_DAYS:
            strength += DATE_PROXIMITY_WEIGHT
            reasons.append("decided within a year")

        # rounding keeps 0.2 + 0.1 from landing just above 0.3
        strength = round(min(1.0, strength), 4)
        if strength <= self.config.relationship_min_strength:
            return None

        return CaseRelationship(
            case_id_1=case_a.id,
            case_id_2=case_b.id,
            relationship_type=relationship_type,
            strength=strength,
            explanation="; ".join(reasons),
        )

    @staticmethod
    def _cites(citing: Record, cited: Record) -> bool:
        title = cited.title.strip().lower()
        return bool(title) and title in citing.case_summary().lower()

    def _candidate_pairs(
        self,
        count: int,
        theme_ids: Optional[Sequence[Sequence[str]]],
    ) -> Iterable[tuple[int, int]]:
        if not self.config.relationship_bucket_by_theme or theme_ids is None:
            for i in range(count):
                for j in range(i + 1, count):
                    yield i, j
            return

        buckets: dict[str, List[int]] = {}
        for index, ids in enumerate(theme_ids):
            for theme_id in ids:
                buckets.setdefault(theme_id, []).append(index)

        pairs = set()
        for indices in buckets.values():
            for a in range(len(indices)):
                for b in range(a + 1, len(indices)):
                    pairs.add((indices[a], indices[b]))
        yield from sorted(pairs)

    def find_relationships(
        self,
        cases: Sequence[Record],
        theme_ids: Optional[Sequence[Sequence[str]]] = None,
    ) -> List[CaseRelationship]:
        """Score every candidate pair and keep the strong ones.

        Args:
            cases: Legal case corpus (indexed as given).
            theme_ids: Theme ids per case, aligned with cases. Only used when
                theme bucketing is enabled.

        Returns:
            Relationships sorted by strength descending, pair order as a tiebreak.
        """
        relationships: List[CaseRelationship] = []
        compared = 0
        for i, j in self._candidate_pairs(len(cases), theme_ids):
            compared += 1
            relationship = self.score_pair(cases[i], cases[j])
            if relationship is not None:
                relationships.append(relationship)

        # sort is stable, so equal strengths keep pair order
        relationships.sort(key=lambda r: r.strength, reverse=True)

        self._logger.info(
            "relationships_scored",
            cases=len(cases),
            pairs_compared=compared,
            relationships=len(relationships),
        )
        return relationships
