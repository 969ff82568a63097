"""
Tests for the metric catalog.
"""

import pytest
from batchperf.api.queries import (METRIC_CATALOG, DeviceClass, MetricKey, MetricKind,
                                   get_metric_definition)
from batchperf.core.errors import ConfigurationError


class TestCatalogContents:
    """Test the default catalog table."""

    def test_every_key_has_a_definition(self):
        assert set(METRIC_CATALOG) == set(MetricKey)
        assert len(METRIC_CATALOG) == 14

    def test_definitions_are_keyed_consistently(self):
        for key, definition in METRIC_CATALOG.items():
            assert definition.key is key

    def test_catalog_order_starts_with_cpu(self):
        keys = [key.value for key in METRIC_CATALOG]
        assert keys[:3] == ["cpuUsage", "individualCpuUsage", "gpuUsage"]
        assert keys[-1] == "networkWrite"

    def test_exactly_three_individual_device_metrics(self):
        per_device = {key.value for key, d in METRIC_CATALOG.items() if d.kind == MetricKind.PER_DEVICE}
        assert per_device == {"individualCpuUsage", "individualGpuUsage", "individualGpuMemory"}

    def test_device_classes(self):
        assert METRIC_CATALOG[MetricKey.INDIVIDUAL_CPU_USAGE].device == DeviceClass.CPU
        assert METRIC_CATALOG[MetricKey.INDIVIDUAL_GPU_MEMORY].device == DeviceClass.GPU
        assert DeviceClass.CPU.dimension == "customDimensions/CPU #"
        assert DeviceClass.GPU.dimension == "customDimensions/GPU #"

    def test_disk_metrics_have_two_segment_dimensions(self):
        definition = METRIC_CATALOG[MetricKey.DISK_USED]
        assert definition.segment_dimensions == ("customDimensions/Disk", "cloud/roleInstance")
        assert METRIC_CATALOG[MetricKey.CPU_USAGE].segment_dimensions == ("cloud/roleInstance",)

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            METRIC_CATALOG[MetricKey.CPU_USAGE] = None

    def test_definitions_are_frozen(self):
        definition = METRIC_CATALOG[MetricKey.CPU_USAGE]
        with pytest.raises(Exception):
            definition.upstream_metric_id = "customMetrics/Other"


class TestGetMetricDefinition:
    """Test catalog lookup."""

    def test_lookup_by_string_key(self):
        definition = get_metric_definition("memoryUsed")
        assert definition.upstream_metric_id == "customMetrics/Memory used"
        assert definition.segment_path == "cloud/roleInstance"

    def test_lookup_by_enum_key(self):
        assert get_metric_definition(MetricKey.DISK_FREE).upstream_metric_id == "customMetrics/Disk free"

    def test_unknown_key_is_configuration_error(self):
        with pytest.raises(ConfigurationError, match="unknown metric key"):
            get_metric_definition("fanSpeed")
