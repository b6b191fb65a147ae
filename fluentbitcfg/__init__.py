"""Fluent Bit pipeline objects and their rendering into configuration text."""

__version__ = "0.1.0"

__all__ = [
    "base",
    "config",
    "custom",
    "filter_sections",
    "filters_kube",
    "filters_parsing",
    "filters_records",
    "input_sections",
    "inputs_files",
    "inputs_metrics",
    "inputs_net",
    "output_sections",
    "parser_sections",
]