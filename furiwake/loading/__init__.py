"""Resource loaders for furiwake."""

from furiwake.loading.resources import (
    load_resource_set,
    load_resources_json,
    store_resource_set,
)

__all__ = ['load_resources_json', 'load_resource_set', 'store_resource_set']
