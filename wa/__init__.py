"""wa: data-platform branching workflow orchestrator."""

__version__ = "0.1.0"
