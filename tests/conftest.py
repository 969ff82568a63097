"""Pytest configuration and shared fixtures"""
import pytest

CPU_ID = "customMetrics/Cpu usage"
GPU_ID = "customMetrics/Gpu usage"
DISK_ID = "customMetrics/Disk usage"


def bucket(start, end, **fields):
    """Time bucket with arbitrary extra fields (aggregate or nested segments)."""
    return {"start": start, "end": end, **fields}


def metrics_entry(metric_key, segments):
    """One entry of a metrics batch response, as App Insights returns it."""
    return {
        "id": metric_key,
        "status": 200,
        "body": {
            "value": {
                "start": "2024-05-01T10:00:00.000Z",
                "end": "2024-05-01T10:02:00.000Z",
                "interval": "PT60S",
                "segments": segments,
            }
        },
    }


@pytest.fixture
def flat_cpu_body():
    """Pool-level cpu usage segmented by node (two nodes per bucket)"""
    return {
        "segments": [
            bucket("2024-05-01T10:00:00.000Z", "2024-05-01T10:01:00.000Z", segments=[
                {"cloud/roleInstance": "tvm-1", CPU_ID: {"avg": 10.0}},
                {"cloud/roleInstance": "tvm-2", CPU_ID: {"avg": 30.0}},
            ]),
            bucket("2024-05-01T10:01:00.000Z", "2024-05-01T10:02:00.000Z", segments=[
                {"cloud/roleInstance": "tvm-1", CPU_ID: {"avg": 20.0}},
                {"cloud/roleInstance": "tvm-2", CPU_ID: {"avg": 40.0}},
            ]),
        ]
    }


@pytest.fixture
def individual_gpu_body():
    """Per-GPU usage; GPU 1 drops out of the second bucket"""
    return {
        "segments": [
            bucket("2024-05-01T10:00:00.000Z", "2024-05-01T10:01:00.000Z", segments=[
                {"customDimensions/GPU #": "0", GPU_ID: {"avg": 91.5}},
                {"customDimensions/GPU #": "1", GPU_ID: {"avg": 87.0}},
            ]),
            bucket("2024-05-01T10:01:00.000Z", "2024-05-01T10:02:00.000Z", segments=[
                {"customDimensions/GPU #": "0", GPU_ID: {"avg": 93.0}},
            ]),
        ]
    }


@pytest.fixture
def disk_used_body():
    """Disk usage segmented by disk then node"""
    return {
        "segments": [
            bucket("2024-05-01T10:00:00.000Z", "2024-05-01T10:01:00.000Z", segments=[
                {"customDimensions/Disk": "/dev/sda1", "segments": [
                    {"cloud/roleInstance": "tvm-1", DISK_ID: {"avg": 100.0}},
                ]},
                {"customDimensions/Disk": "/dev/sdb1", "segments": [
                    {"cloud/roleInstance": "tvm-1", DISK_ID: {"avg": 300.0}},
                ]},
            ]),
        ]
    }


@pytest.fixture
def metrics_batch_response(flat_cpu_body, individual_gpu_body):
    """Batch response in the order App Insights returned it (not request order)"""
    return [
        metrics_entry("individualGpuUsage", individual_gpu_body["segments"]),
        metrics_entry("cpuUsage", flat_cpu_body["segments"]),
    ]
