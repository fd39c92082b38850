from gocovgui.adapters.collector.gocov import (
    FileCollector,
    GocovCollector,
    acquire_gocov,
    find_gocov,
    require_gocov,
)

__all__ = ["FileCollector", "GocovCollector", "acquire_gocov", "find_gocov", "require_gocov"]
