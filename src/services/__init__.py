from src.services.health import build_health_report, build_status, check_database

__all__ = [
    "build_health_report",
    "build_status",
    "check_database",
]
