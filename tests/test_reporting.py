import io

from tilebench.config import SessionConfig
from tilebench.reporting import RunReporter


class TestRunReporter:
    def test_for_session_info(self):
        config = SessionConfig.default().with_framerate(4.0).with_multithreading(False)
        reporter = RunReporter.for_session("bench.txt", config, stream=io.StringIO())
        assert reporter.config_info["Resolution"] == "1280x720"
        assert reporter.config_info["Multithreaded"] == "off"
        assert reporter.config_info["Frame delta"] == "0.250000s"

    def test_realtime_label(self):
        reporter = RunReporter.for_session("bench.txt", SessionConfig.default())
        assert reporter.config_info["Frame delta"] == "realtime"

    def test_full_report(self, make_store):
        stream = io.StringIO()
        store = make_store((0.5, [0.01, 0.02, 0.03]), (0.25, []))
        RunReporter("bench.txt", {"Tile size": 8}, stream=stream).print_full_report(
            store
        )
        text = stream.getvalue()
        assert "bench.txt" in text
        assert "Tile size: 8" in text
        assert "Runs: 2" in text

        rows = [line.split() for line in text.splitlines() if line[:4].strip().isdigit()]
        assert len(rows) == 2
        assert rows[0][:4] == ["0", "3", "500.000", "20.000"]
        assert rows[0][-1] == "50.0"
        assert rows[1][:3] == ["1", "0", "250.000"]
        assert rows[1][-1] == "0.0"
