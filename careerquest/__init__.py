"""CareerQuest backend: interest profiler, O*NET catalog, skill roadmaps and saved items."""

__version__ = "1.0.0"
