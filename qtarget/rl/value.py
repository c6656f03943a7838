"""Linear action-value function Q(s, a) = w . phi(s, a)."""

from __future__ import annotations

import math

import numpy as np

from ..errors import ContractViolation, NumericalInstabilityError


class LinearValueFunction:
    """Dot product of a weight vector with a feature vector.

    ``normalize`` rescales by the plain sum of the weights (not a norm), so the
    weights always sum to one afterwards and the bias weight absorbs drift.
    """

    @staticmethod
    def evaluate(weights: np.ndarray, features: np.ndarray) -> float:
        if weights.shape != features.shape:
            raise ContractViolation(
                f"weights shape {weights.shape} does not match features shape {features.shape}"
            )
        return float(np.dot(weights, features))

    @staticmethod
    def normalize(weights: np.ndarray) -> np.ndarray:
        total = float(np.sum(weights))
        if total == 0.0 or not math.isfinite(total):
            raise NumericalInstabilityError(f"cannot normalize weights summing to {total}: {weights.tolist()}")
        normalized = weights / total
        if not np.all(np.isfinite(normalized)):
            raise NumericalInstabilityError(f"normalization produced non-finite weights: {normalized.tolist()}")
        return normalized
