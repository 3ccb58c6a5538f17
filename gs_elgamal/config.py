"""
Package Configuration
=====================

Defaults are read from environment variables once at import time and exposed
through the global ``config`` instance.

- GS_ELGAMAL_CURVE: charm-crypto curve name used by ``setup()``
- GS_ELGAMAL_REUSE_CRS: whether a ProvingSession keeps one CRS for every
  statement it proves (true) or draws a fresh CRS per proof (false)
- GS_ELGAMAL_LOG_LEVEL: level applied by the demo script
"""

import os

DEFAULT_PAIRING_CURVE = os.getenv('GS_ELGAMAL_CURVE', 'MNT224')

# Sharing one CRS across unrelated statements is a deployment decision,
# so it is off unless explicitly enabled.
DEFAULT_REUSE_CRS = os.getenv('GS_ELGAMAL_REUSE_CRS', 'false').lower() == 'true'

DEFAULT_LOG_LEVEL = os.getenv('GS_ELGAMAL_LOG_LEVEL', 'WARNING').upper()

# Curves tried in order when the configured one cannot be initialized
FALLBACK_CURVES = ('BN254', 'SS512')


class Config:
    """Runtime configuration."""

    def __init__(self):
        self.pairing_curve = DEFAULT_PAIRING_CURVE
        self.reuse_crs = DEFAULT_REUSE_CRS
        self.log_level = DEFAULT_LOG_LEVEL
        self.fallback_curves = FALLBACK_CURVES

    @property
    def curves(self):
        """Configured curve first, then the fallbacks not already listed."""
        return (self.pairing_curve,) + tuple(
            c for c in self.fallback_curves if c != self.pairing_curve
        )


config = Config()
