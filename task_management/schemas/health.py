from datetime import datetime

from task_management.schemas.base import CamelModel


class HealthResponse(CamelModel):
    status: str
    timestamp: datetime
    database: str
