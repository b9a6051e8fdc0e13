"""Pattern-based extraction of device hints from free text.

Two hints drive cross-jurisdiction resolution:
- Manufacturer: text following a label such as "Manufacturer:" or
  "Applicant:", up to the next comma, period or line break.
- Device name: the record title with regulatory prefixes (authority,
  filing type, action type) stripped from the front.

Both return None when nothing usable is found. None means insufficient
signal, not "no device".
"""

import re
from typing import Optional

from loguru import logger

from regintel_engine.config.engine_config import DEFAULT_CONFIG, EngineConfig


class EntityExtractor:
    """
    Extracts manufacturer and device-name hints using ordered regex rules.

    Usage:
        extractor = EntityExtractor()
        extractor.extract_manufacturer("Applicant: Acme Medical. ...")  # "Acme Medical"
        extractor.extract_device_name("FDA 510(k) Clearance: Stent X")  # "Stent X"

    Attributes:
        manufacturer_patterns: Compiled label patterns, tried in order
        title_prefixes: Compiled prefix patterns, applied in order
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        """
        Initialize extractor from the engine configuration.

        Args:
            config: Engine configuration providing the pattern lists
        """
        self.manufacturer_patterns = [
            re.compile(p, re.IGNORECASE) for p in config.manufacturer_patterns
        ]
        self.title_prefixes = [
            re.compile(p, re.IGNORECASE) for p in config.device_title_prefixes
        ]
        self._logger = logger.bind(component="EntityExtractor")

    def extract_manufacturer(self, text: Optional[str]) -> Optional[str]:
        """
        Extract the manufacturer named after the first matching label.

        Args:
            text: Free-text body of a record

        Returns:
            Manufacturer name, or None when no label pattern matches
        """
        if not text:
            return None

        for pattern in self.manufacturer_patterns:
            match = pattern.search(text)
            if match and match.group(1).strip():
                return match.group(1).strip()

        return None

    def extract_device_name(self, title: Optional[str]) -> Optional[str]:
        """
        Strip regulatory prefixes from a title and return the remainder.

        Prefixes are removed in a fixed order: authority name, filing type,
        action type. "FDA 510(k) Clearance: Stent X" becomes "Stent X".

        Args:
            title: Record title

        Returns:
            Device name, or None when nothing remains after stripping
        """
        if not title:
            return None

        clean = title
        for prefix in self.title_prefixes:
            clean = prefix.sub("", clean, count=1)

        clean = clean.strip()
        return clean or None

    def extract(self, title: Optional[str], body: Optional[str]) -> tuple[Optional[str], Optional[str]]:
        """Return (manufacturer, device_name) for a record's title and body."""
        manufacturer = self.extract_manufacturer(body)
        device_name = self.extract_device_name(title)
        if manufacturer is None and device_name is None:
            self._logger.debug("No device hints extracted", title=(title or "")[:50])
        return manufacturer, device_name


__all__ = ["EntityExtractor"]
