"""Thai-standard reinforced concrete beam and footing design (WSD and SDM)."""

__version__ = "0.1.0"
