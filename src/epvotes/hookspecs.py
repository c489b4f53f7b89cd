from pluggy import HookimplMarker, HookspecMarker

hookspec = HookspecMarker("epvotes")
hookimpl = HookimplMarker("epvotes")


class EPVotesSpec:
    @hookspec(firstresult=True)
    def cache_load(self, key):
        """Returns the cached JSON data stored under key, or None on a miss"""

    @hookspec(firstresult=True)
    def cache_store(self, key, data):
        """Stores JSON-compatible data under key. Returns True once stored"""
