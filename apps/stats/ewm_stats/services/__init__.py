from ewm_stats.services.stats_service import get_stats, record_hit, split_uris

__all__ = ["record_hit", "get_stats", "split_uris"]
