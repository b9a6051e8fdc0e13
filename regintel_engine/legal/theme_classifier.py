"""Legal theme assignment against the static theme taxonomy.

A case belongs to a theme when any theme keyword appears, case-insensitively,
in the case's title, summary and key issues. Cases may carry several themes
or none; an unthemed case takes no part in chains or conflicts.
"""

from typing import Dict, List, Sequence

import structlog

from regintel_engine.config.engine_config import DEFAULT_CONFIG, EngineConfig
from regintel_engine.data_management.schemas import (
    CaseAssessment,
    PrecedentValue,
    Record,
    Theme,
)
from regintel_engine.resolution.text_similarity import contains_any


class ThemeClassifier:
    """Assigns legal cases to taxonomy themes.

    Usage:
        classifier = ThemeClassifier()
        theme_ids = classifier.match_themes(case)
        themes = classifier.assign(cases)  # Themes carrying related_cases
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG) -> None:
        """Initialize ThemeClassifier.

        Args:
            config: Engine configuration providing the theme taxonomy.
        """
        self.config = config
        self._logger = structlog.get_logger().bind(component="ThemeClassifier")

    def match_themes(self, case: Record) -> List[str]:
        """Return the ids of every theme whose keywords occur in the case text.

        Args:
            case: Legal case record.

        Returns:
            Theme ids in taxonomy order.
        """
        text = case.case_text()
        return [
            theme.id
            for theme in self.config.themes
            if contains_any(text, theme.keywords)
        ]

    def assign(self, cases: Sequence[Record]) -> List[Theme]:
        """Copy every taxonomy theme with the ids of its matching cases.

        Args:
            cases: Legal case corpus.

        Returns:
            All themes in taxonomy order, each with related_cases in corpus order.
        """
        assignments: Dict[str, List[str]] = {theme.id: [] for theme in self.config.themes}
        for case in cases:
            for theme_id in self.match_themes(case):
                assignments[theme_id].append(case.id)

        themes = [
            theme.model_copy(update={"related_cases": tuple(assignments[theme.id])})
            for theme in self.config.themes
        ]
        self._logger.debug(
            "themes_assigned",
            cases=len(cases),
            themed=sum(1 for t in themes if t.related_cases),
        )
        return themes

    def assess_case(self, case: Record) -> CaseAssessment:
        """Theme assignment, precedent value and risk level for one case.

        Precedent value is the highest among matched themes, low when the
        case matches none. Risk level follows the same rule.

        Args:
            case: Legal case record.

        Returns:
            CaseAssessment for the case.
        """
        theme_ids = self.match_themes(case)

        precedent = PrecedentValue.LOW
        for theme_id in theme_ids:
            theme = self.config.theme(theme_id)
            if theme is not None and theme.precedent_value.rank > precedent.rank:
                precedent = theme.precedent_value

        risk_text = f"{case.case_text()} {case.body}"
        return CaseAssessment(
            case_id=case.id,
            theme_ids=tuple(theme_ids),
            precedent_value=precedent,
            risk_level=precedent.value if theme_ids else "low",
            risk_indicators=tuple(contains_any(risk_text, self.config.risk_indicators)),
        )
