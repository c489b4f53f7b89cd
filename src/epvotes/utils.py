import pluggy

from .hookspecs import EPVotesSpec
from .plugins import FileCachePlugin

pm = pluggy.PluginManager("epvotes")
pm.add_hookspecs(EPVotesSpec)
pm.register(FileCachePlugin(), name="file-cache")
pm.load_setuptools_entrypoints("epvotes")
