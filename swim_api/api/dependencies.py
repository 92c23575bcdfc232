"""FastAPI dependencies for dependency injection."""
from functools import lru_cache

from swim_api.data.report_cache import ReportCache
from swim_api.services.report_service import ReportService
from swim_engine.services.assessment_service import AssessmentService


@lru_cache()
def get_report_cache() -> ReportCache:
    """Get cached report cache instance."""
    return ReportCache()


@lru_cache()
def get_assessment_service() -> AssessmentService:
    """Get cached assessment service instance."""
    return AssessmentService()


def get_report_service() -> ReportService:
    """Get report service instance."""
    return ReportService(
        assessment_service=get_assessment_service(),
        report_cache=get_report_cache(),
    )
