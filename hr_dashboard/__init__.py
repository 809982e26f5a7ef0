"""HR dashboard service: HTTP surface and audit trail for the résumé intake pipeline."""

from hr_dashboard.audit import audit_log, log_evaluation, setup_app_logging

__all__ = ["audit_log", "log_evaluation", "setup_app_logging"]
