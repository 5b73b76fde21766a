from nestif.reporting.formatters import format_json, format_text, sort_issues

__all__ = ["format_json", "format_text", "sort_issues"]
