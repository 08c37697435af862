from ewm_stats.models.endpoint_hit import Base, EndpointHit

__all__ = ["Base", "EndpointHit"]
