"""StudyKit — bilingual study kits from video and audio."""

__version__ = "0.1.0"
