from ewm_stats.api.schemas.stats import EndpointHitDto, ViewStatsDto

__all__ = ["EndpointHitDto", "ViewStatsDto"]
