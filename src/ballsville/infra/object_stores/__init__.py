"""Object store adapters."""

from ballsville.infra.object_stores.memory_object_store import MemoryObjectStore  # noqa: F401
from ballsville.infra.object_stores.prefix_routed_object_store import (  # noqa: F401
    PrefixRoutedObjectStore,
)
from ballsville.infra.object_stores.s3_object_store import S3ObjectStore  # noqa: F401
