"""K-means evaluation over a range of cluster counts."""

__all__ = [
    "cli",
    "clustering",
    "config",
    "constants",
    "errors",
    "evaluation",
    "extractor",
    "metrics",
    "reports",
    "tables",
    "visuals",
]
__version__ = "0.1.0"
