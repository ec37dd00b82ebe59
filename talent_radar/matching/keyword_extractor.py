"""Technology keyword extraction from free-text requirements."""
from pathlib import Path
from typing import Iterable, Optional

import yaml

DEFAULT_VOCABULARY_PATH = Path(__file__).resolve().parents[2] / "config" / "technologies.yaml"


def load_vocabulary(path: str | Path) -> list[str]:
    """Load the technology vocabulary from YAML.

    The file maps category names to lists of terms. Terms are lowercased
    and deduplicated; file order is preserved.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if isinstance(data, dict):
        groups = data.values()
    else:
        groups = [data]

    terms: list[str] = []
    seen: set[str] = set()
    for group in groups:
        for term in group or []:
            normalized = str(term).strip().lower()
            if normalized and normalized not in seen:
                seen.add(normalized)
                terms.append(normalized)
    return terms


class KeywordExtractor:
    """Map requirements text to known technology keywords."""

    def __init__(
        self,
        vocabulary: Optional[Iterable[str]] = None,
        vocabulary_path: Optional[str | Path] = None,
    ):
        """
        Initialize keyword extractor.

        Args:
            vocabulary: Explicit list of terms (takes precedence)
            vocabulary_path: Path to a technologies.yaml file
        """
        if vocabulary is not None:
            self.vocabulary = [str(t).strip().lower() for t in vocabulary if str(t).strip()]
        else:
            self.vocabulary = load_vocabulary(vocabulary_path or DEFAULT_VOCABULARY_PATH)
        # (term, term with hyphens as spaces)
        self._forms = [(term, term.replace("-", " ")) for term in self.vocabulary]

    def extract(self, text: Optional[str]) -> list[str]:
        """
        Extract vocabulary terms mentioned in the text.

        A term matches when it, or its hyphen-to-space variant, occurs as a
        substring of the lowercased text. Output follows vocabulary order.

        Args:
            text: Free-text requirements

        Returns:
            List of matched terms (empty for empty input)
        """
        if not text:
            return []
        lowered = text.lower()
        return [term for term, spaced in self._forms if term in lowered or spaced in lowered]
