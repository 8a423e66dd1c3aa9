from kroki_bridge.observability.metrics import MetricsRegistry


def test_labelled_counters_render() -> None:
    metrics = MetricsRegistry()
    metrics.inc("renders_total", operation="url")
    metrics.inc("renders_total", operation="url")
    metrics.inc("renders_total", operation="download")
    assert metrics.value("renders_total", operation="url") == 2.0
    text = metrics.render_prometheus()
    assert "# TYPE renders_total counter" in text
    assert 'renders_total{operation="download"} 1.000000' in text


def test_track_ms_records_even_on_error() -> None:
    metrics = MetricsRegistry()
    try:
        with metrics.track_ms("render_duration"):
            raise ValueError("x")
    except ValueError:
        pass
    assert "render_duration_count 1" in metrics.render_prometheus()
