"""
Evaluation options for tie-point consistency assessment.

This module defines the configuration used when a tie-point set is cleaned
and evaluated, including duplicate handling, origin shifting and the
tolerances that turn measurements into pass/warning decisions.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class EvaluationOptions:
    """
    Configuration options for tie-point consistency assessment.

    Attributes:
        duplicate_tolerance: Per-axis work-point tolerance when pruning duplicates (default: 0.0)
        remove_duplicates: Prune duplicate reference points before evaluation (default: True)
        recenter_origins: Shift both systems to their control centroids first (default: False)
        scale_tolerance: Allowed coefficient of variation of pairwise length ratios (default: 0.05)
        anisomorphism_tolerance: Allowed deviation of anisomorphism from 1.0 (default: 0.05)
        similarity_tolerance: Allowed deviation of similarity from 1.0 (default: 0.05)
    """

    duplicate_tolerance: float = 0.0
    remove_duplicates: bool = True
    recenter_origins: bool = False
    scale_tolerance: float = 0.05
    anisomorphism_tolerance: float = 0.05
    similarity_tolerance: float = 0.05

    def __post_init__(self):
        """Validate options after initialization."""
        if self.duplicate_tolerance < 0:
            raise ValueError("duplicate_tolerance cannot be negative")

        if self.scale_tolerance <= 0:
            raise ValueError("scale_tolerance must be positive")

        if self.anisomorphism_tolerance <= 0:
            raise ValueError("anisomorphism_tolerance must be positive")

        if self.similarity_tolerance <= 0:
            raise ValueError("similarity_tolerance must be positive")

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize options to dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "duplicate_tolerance": self.duplicate_tolerance,
            "remove_duplicates": self.remove_duplicates,
            "recenter_origins": self.recenter_origins,
            "scale_tolerance": self.scale_tolerance,
            "anisomorphism_tolerance": self.anisomorphism_tolerance,
            "similarity_tolerance": self.similarity_tolerance,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EvaluationOptions':
        """
        Create EvaluationOptions from a dictionary.

        Missing keys take their default values.
        """
        defaults = cls()
        return cls(
            duplicate_tolerance=float(data.get("duplicate_tolerance", defaults.duplicate_tolerance)),
            remove_duplicates=bool(data.get("remove_duplicates", defaults.remove_duplicates)),
            recenter_origins=bool(data.get("recenter_origins", defaults.recenter_origins)),
            scale_tolerance=float(data.get("scale_tolerance", defaults.scale_tolerance)),
            anisomorphism_tolerance=float(data.get("anisomorphism_tolerance", defaults.anisomorphism_tolerance)),
            similarity_tolerance=float(data.get("similarity_tolerance", defaults.similarity_tolerance)),
        )
