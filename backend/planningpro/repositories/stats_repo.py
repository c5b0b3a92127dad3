"""Backend statistics and demo-data bootstrap."""

from planningpro.domain.interfaces import IStatsRepository
from planningpro.repositories.api_client import BackendAPIClient

STATS_PERIODS = ("week", "month", "year")


class StatsRepository(IStatsRepository):
    def __init__(self, api: BackendAPIClient) -> None:
        self.api = api

    def get_dashboard(self) -> dict:
        return self.api.get("/stats") or {}

    def get_by_period(self, period: str) -> dict:
        if period not in STATS_PERIODS:
            raise ValueError(f"Unsupported stats period: {period}")
        return self.api.get(f"/stats/period/{period}") or {}

    def init_demo_data(self) -> dict:
        return self.api.post("/init-demo-data") or {}
