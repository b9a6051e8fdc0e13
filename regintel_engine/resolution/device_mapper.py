"""Cross-jurisdiction device entity mapping.

Partitions a corpus of regulatory updates into clusters that describe the
same device under different authorities:

1. Key every record by (manufacturer or "unknown", device name or "unknown").
   Records yielding neither hint carry no signal and are skipped.
2. Drop singleton groups.
3. Drop groups with fewer than two distinct authorities. A same-authority
   duplicate is not cross-jurisdictional evidence.
4. Accept a group when the mean pairwise similarity of title + body over
   every unordered pair reaches the mapping threshold.

Key computation is O(n) over the corpus. The pairwise stage is O(k^2) per
group, bounded because groups share manufacturer and device name.

Also links clinical studies to approvals and standards to the regulations
of records that reference them.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from loguru import logger

from regintel_engine.config.engine_config import DEFAULT_CONFIG, EngineConfig
from regintel_engine.data_management.schemas import (
    CrossReferenceReport,
    EntityMapping,
    MappingBasis,
    Record,
    StandardMapping,
)
from regintel_engine.resolution.entity_extractor import EntityExtractor
from regintel_engine.resolution.text_similarity import (
    contains_any,
    mean_pairwise_similarity,
    normalize,
    similarity,
)

UNKNOWN = "unknown"

APPROVAL_TYPE_MARKERS = ("510(k)", "pma", "ce mark", "approval", "clearance")
STUDY_BODY_MARKERS = ("clinical study", "clinical trial")


@dataclass
class MappingStats:
    """Statistics tracking for one device mapping run."""

    total_input: int = 0
    no_signal: int = 0
    groups: int = 0
    singleton_groups: int = 0
    same_authority_groups: int = 0
    below_threshold: int = 0
    mappings: int = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "total_input": self.total_input,
            "no_signal": self.no_signal,
            "groups": self.groups,
            "singleton_groups": self.singleton_groups,
            "same_authority_groups": self.same_authority_groups,
            "below_threshold": self.below_threshold,
            "mappings": self.mappings,
        }


@dataclass(frozen=True)
class _Hints:
    manufacturer: Optional[str]
    device_name: Optional[str]

    @property
    def has_signal(self) -> bool:
        return self.manufacturer is not None or self.device_name is not None

    @property
    def group_key(self) -> tuple[str, str]:
        return (self.manufacturer or UNKNOWN, self.device_name or UNKNOWN)


class DeviceEntityMapper:
    """
    Groups records across jurisdictions into same-device clusters.

    The corpus is handled as an indexed array: hints and token sets are
    computed once per record, groups hold record indices, and the pairwise
    stage iterates by index.

    Usage:
        mapper = DeviceEntityMapper()
        mappings = mapper.map_devices(records)

    Attributes:
        config: Engine configuration
        extractor: Manufacturer/device-name extractor
        stats: Statistics of the most recent map_devices call
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        extractor: Optional[EntityExtractor] = None,
    ):
        """
        Initialize the mapper.

        Args:
            config: Engine configuration (thresholds, patterns, standards)
            extractor: Entity extractor (built from config if None)
        """
        self.config = config
        self.extractor = extractor or EntityExtractor(config)
        self.stats = MappingStats()
        self.logger = logger.bind(component="DeviceEntityMapper")

    def _hints(self, records: Sequence[Record]) -> List[_Hints]:
        return [
            _Hints(*self.extractor.extract(record.title, record.body))
            for record in records
        ]

    def map_devices(
        self,
        records: Sequence[Record],
        now: Optional[datetime] = None,
    ) -> List[EntityMapping]:
        """
        Build cross-jurisdiction entity mappings.

        Args:
            records: Corpus snapshot (regulatory updates)
            now: Reference time stamped on the mappings (UTC now if None)

        Returns:
            Mappings in order of first appearance of their group key
        """
        computed_at = now or datetime.now(timezone.utc)
        self.stats = MappingStats(total_input=len(records))
        hints = self._hints(records)

        groups: Dict[tuple[str, str], List[int]] = {}
        for index, hint in enumerate(hints):
            if not hint.has_signal:
                self.stats.no_signal += 1
                continue
            groups.setdefault(hint.group_key, []).append(index)
        self.stats.groups = len(groups)

        mappings: List[EntityMapping] = []
        for (manufacturer, device_name), indices in groups.items():
            if len(indices) < 2:
                self.stats.singleton_groups += 1
                continue

            authorities = _distinct_authorities(records, indices)
            if len(authorities) < 2:
                self.stats.same_authority_groups += 1
                self.logger.debug(
                    "Group rejected: not cross-jurisdictional",
                    manufacturer=manufacturer,
                    device_name=device_name,
                    size=len(indices),
                )
                continue

            token_sets = [normalize(records[i].text()) for i in indices]
            confidence = mean_pairwise_similarity(token_sets)

            if confidence < self.config.mapping_threshold:
                self.stats.below_threshold += 1
                self.logger.debug(
                    f"Group below threshold ({confidence:.2f})",
                    manufacturer=manufacturer,
                    device_name=device_name,
                )
                continue

            mappings.append(
                EntityMapping(
                    primary_id=records[indices[0]].id,
                    related_ids=tuple(records[i].id for i in indices[1:]),
                    mapping_basis=(
                        MappingBasis.MANUFACTURER
                        if manufacturer != UNKNOWN
                        else MappingBasis.DEVICE_NAME
                    ),
                    confidence=confidence,
                    computed_at=computed_at,
                    manufacturer=None if manufacturer == UNKNOWN else manufacturer,
                    device_name=None if device_name == UNKNOWN else device_name,
                    authorities=authorities,
                )
            )

        self.stats.mappings = len(mappings)
        self.logger.info(
            f"Created {len(mappings)} device mappings",
            **self.stats.to_dict()
        )
        return mappings

    def link_clinical_studies(
        self,
        records: Sequence[Record],
        now: Optional[datetime] = None,
    ) -> List[EntityMapping]:
        """
        Link clinical-study records to approval records of the same device.

        A study is linked to an approval when device-name or manufacturer
        similarity reaches the mapping threshold. The mapping confidence is
        its weakest accepted link.

        Args:
            records: Corpus snapshot (regulatory updates)
            now: Reference time stamped on the mappings

        Returns:
            One clinical_study mapping per study with at least one linked approval
        """
        computed_at = now or datetime.now(timezone.utc)
        hints = self._hints(records)
        threshold = self.config.mapping_threshold

        studies = [i for i, r in enumerate(records) if _is_clinical_study(r)]
        approvals = [i for i, r in enumerate(records) if _is_approval(r)]

        mappings: List[EntityMapping] = []
        for study_index in studies:
            study_hint = hints[study_index]
            if not study_hint.has_signal:
                continue

            linked: List[int] = []
            link_confidences: List[float] = []
            for approval_index in approvals:
                if approval_index == study_index:
                    continue
                approval_hint = hints[approval_index]

                confidence = 0.0
                if study_hint.device_name and approval_hint.device_name:
                    confidence = max(
                        confidence,
                        similarity(study_hint.device_name, approval_hint.device_name),
                    )
                if study_hint.manufacturer and approval_hint.manufacturer:
                    confidence = max(
                        confidence,
                        similarity(study_hint.manufacturer, approval_hint.manufacturer),
                    )

                if confidence >= threshold:
                    linked.append(approval_index)
                    link_confidences.append(confidence)

            if linked:
                mappings.append(
                    EntityMapping(
                        primary_id=records[study_index].id,
                        related_ids=tuple(records[i].id for i in linked),
                        mapping_basis=MappingBasis.CLINICAL_STUDY,
                        confidence=min(link_confidences),
                        computed_at=computed_at,
                        manufacturer=study_hint.manufacturer,
                        device_name=study_hint.device_name,
                        authorities=_distinct_authorities(
                            records, [study_index, *linked]
                        ),
                    )
                )

        self.logger.info(f"Created {len(mappings)} clinical study mappings")
        return mappings

    def map_standards(
        self,
        records: Sequence[Record],
        now: Optional[datetime] = None,
    ) -> List[StandardMapping]:
        """
        Map known standards to the regulations of records mentioning them.

        Args:
            records: Corpus snapshot (regulatory updates)
            now: Reference time stamped on the mappings

        Returns:
            One mapping per standard referenced by at least one record
        """
        computed_at = now or datetime.now(timezone.utc)
        texts = [record.text().lower() for record in records]

        mappings: List[StandardMapping] = []
        for standard in self.config.known_standards:
            matching = [
                i for i, text in enumerate(texts)
                if contains_any(text, standard.keywords)
            ]
            if not matching:
                continue

            regulations: List[str] = []
            for i in matching:
                label = (
                    f"{records[i].authority or 'Unknown'} - "
                    f"{records[i].update_type or 'Regulatory Update'}"
                )
                if label not in regulations:
                    regulations.append(label)

            mappings.append(
                StandardMapping(
                    standard_id=standard.id,
                    name=standard.name,
                    applicable_regulations=tuple(regulations),
                    device_categories=tuple(standard.categories),
                    requirements=tuple(standard.regulations),
                    record_ids=tuple(records[i].id for i in matching),
                    computed_at=computed_at,
                )
            )

        self.logger.info(f"Created {len(mappings)} standard mappings")
        return mappings

    def cross_reference(
        self,
        records: Sequence[Record],
        now: Optional[datetime] = None,
    ) -> CrossReferenceReport:
        """Run device, standard and clinical-study mapping over one snapshot."""
        computed_at = now or datetime.now(timezone.utc)
        report = CrossReferenceReport(
            device_mappings=self.map_devices(records, computed_at),
            standard_mappings=self.map_standards(records, computed_at),
            clinical_mappings=self.link_clinical_studies(records, computed_at),
        )
        self.logger.info(
            f"Generated cross-reference with {report.total_mappings} total mappings"
        )
        return report


def _distinct_authorities(records: Sequence[Record], indices: Sequence[int]) -> tuple[str, ...]:
    """Distinct non-empty authorities in first-seen order, ignoring case."""
    seen: List[str] = []
    keys: set[str] = set()
    for i in indices:
        authority = records[i].authority.strip()
        key = authority.casefold()
        if authority and key not in keys:
            keys.add(key)
            seen.append(authority)
    return tuple(seen)


def _is_clinical_study(record: Record) -> bool:
    update_type = (record.update_type or "").lower()
    body = record.body.lower()
    return "clinical" in update_type or any(m in body for m in STUDY_BODY_MARKERS)


def _is_approval(record: Record) -> bool:
    update_type = (record.update_type or "").lower()
    return any(marker in update_type for marker in APPROVAL_TYPE_MARKERS)


__all__ = ["DeviceEntityMapper", "MappingStats"]
