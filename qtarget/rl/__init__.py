from .features import NUM_FEATURES, FeatureExtractor, FeatureIndex
from .value import LinearValueFunction

__all__ = ["NUM_FEATURES", "FeatureExtractor", "FeatureIndex", "LinearValueFunction"]
