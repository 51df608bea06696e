__version__ = "0.1.0"

__all__ = [
    "__version__",
    "cli",
    "config",
    "context",
    "discovery",
    "errors",
    "exit_codes",
    "generator",
    "logging",
    "model",
    "naming",
    "options",
    "pipeline",
    "process",
]
