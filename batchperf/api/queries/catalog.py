"""
Metric catalog.

Static table of every metric the performance graphs can show, and how each
one maps to an App Insights metric id and segmentation path. Adding a metric
means adding a MetricKey member and one catalog entry; a per-device metric
also names its DeviceClass so the reshaper fans it out per CPU/GPU.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ...core.errors import ConfigurationError

# Identity dimensions used by the pool/node filter
POOL_DIMENSION = "cloud/roleName"
NODE_DIMENSION = "cloud/roleInstance"


class MetricKey(str, Enum):
    CPU_USAGE = "cpuUsage"
    INDIVIDUAL_CPU_USAGE = "individualCpuUsage"
    GPU_USAGE = "gpuUsage"
    INDIVIDUAL_GPU_USAGE = "individualGpuUsage"
    GPU_MEMORY = "gpuMemory"
    INDIVIDUAL_GPU_MEMORY = "individualGpuMemory"
    MEMORY_AVAILABLE = "memoryAvailable"
    MEMORY_USED = "memoryUsed"
    DISK_READ = "diskRead"
    DISK_WRITE = "diskWrite"
    DISK_USED = "diskUsed"
    DISK_FREE = "diskFree"
    NETWORK_READ = "networkRead"
    NETWORK_WRITE = "networkWrite"


class MetricKind(str, Enum):
    """How a metric's response is reshaped."""
    FLAT = "flat"
    PER_DEVICE = "per_device"


class DeviceClass(str, Enum):
    CPU = "cpu"
    GPU = "gpu"

    @property
    def dimension(self) -> str:
        """Response field holding the device ordinal."""
        return DEVICE_DIMENSIONS[self]


# Request segments use the bracketed form, responses carry the plain name
DEVICE_DIMENSIONS = {
    DeviceClass.CPU: "customDimensions/CPU #",
    DeviceClass.GPU: "customDimensions/GPU #",
}


class MetricDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: MetricKey
    upstream_metric_id: str
    segment_path: str
    device: Optional[DeviceClass] = None

    @property
    def kind(self) -> MetricKind:
        return MetricKind.PER_DEVICE if self.device is not None else MetricKind.FLAT

    @property
    def segment_dimensions(self) -> Tuple[str, ...]:
        """Segmentation path split into its dimensions, outermost first."""
        return tuple(part.strip() for part in self.segment_path.split(","))


def _metric(key: MetricKey, upstream_metric_id: str, segment_path: str,
            device: Optional[DeviceClass] = None) -> Tuple[MetricKey, MetricDefinition]:
    return key, MetricDefinition(
        key=key,
        upstream_metric_id=upstream_metric_id,
        segment_path=segment_path,
        device=device,
    )


METRIC_CATALOG: Mapping[MetricKey, MetricDefinition] = MappingProxyType(dict([
    # CPU
    _metric(MetricKey.CPU_USAGE, "customMetrics/Cpu usage", "cloud/roleInstance"),
    _metric(MetricKey.INDIVIDUAL_CPU_USAGE, "customMetrics/Cpu usage", "customDimensions/[CPU #]", DeviceClass.CPU),

    # GPU
    _metric(MetricKey.GPU_USAGE, "customMetrics/Gpu usage", "cloud/roleInstance"),
    _metric(MetricKey.INDIVIDUAL_GPU_USAGE, "customMetrics/Gpu usage", "customDimensions/[GPU #]", DeviceClass.GPU),
    _metric(MetricKey.GPU_MEMORY, "customMetrics/Gpu memory usage", "cloud/roleInstance"),
    _metric(MetricKey.INDIVIDUAL_GPU_MEMORY, "customMetrics/Gpu memory usage", "customDimensions/[GPU #]", DeviceClass.GPU),

    # Memory
    _metric(MetricKey.MEMORY_AVAILABLE, "customMetrics/Memory available", "cloud/roleInstance"),
    _metric(MetricKey.MEMORY_USED, "customMetrics/Memory used", "cloud/roleInstance"),

    # Storage
    _metric(MetricKey.DISK_READ, "customMetrics/Disk read", "cloud/roleInstance"),
    _metric(MetricKey.DISK_WRITE, "customMetrics/Disk write", "cloud/roleInstance"),
    _metric(MetricKey.DISK_USED, "customMetrics/Disk usage", "customDimensions/Disk,cloud/roleInstance"),
    _metric(MetricKey.DISK_FREE, "customMetrics/Disk free", "customDimensions/Disk,cloud/roleInstance"),

    # Network
    _metric(MetricKey.NETWORK_READ, "customMetrics/Network read", "cloud/roleInstance"),
    _metric(MetricKey.NETWORK_WRITE, "customMetrics/Network write", "cloud/roleInstance"),
]))

_missing = [key.value for key in MetricKey if key not in METRIC_CATALOG]
if _missing:
    raise ConfigurationError(f"metric keys without catalog entry: {', '.join(_missing)}")


def get_metric_definition(key: str) -> MetricDefinition:
    """
    Look up a catalog entry by key.

    Raises:
        ConfigurationError: key is not in the catalog
    """
    try:
        return METRIC_CATALOG[MetricKey(key)]
    except (ValueError, KeyError):
        raise ConfigurationError(f"unknown metric key: {key!r}") from None
