"""ACE Prime: a dual-persona Discord assistant built on a validated stage pipeline."""

__version__ = "1.0.0"
