import msgspec
import pytest

from tilebench.config import (
    MAX_RESOLUTION,
    HarnessConfig,
    KernelDialect,
    SessionConfig,
    round_up_to_tile,
)


class TestSessionConfig:
    def test_default(self):
        config = SessionConfig.default()
        assert (config.resolution_w, config.resolution_h) == (1280, 720)
        assert config.forced_frame_delta is None
        assert config.multithreaded is True
        assert config.tile_size == 8

    def test_default_rounds_for_large_tiles(self):
        config = SessionConfig.default(tile_size=100)
        assert (config.resolution_w, config.resolution_h) == (1300, 800)

    def test_unaligned_resolution_rejected(self):
        with pytest.raises(ValueError):
            SessionConfig(resolution_w=100, resolution_h=64)

    def test_non_positive_delta_rejected(self):
        with pytest.raises(ValueError):
            SessionConfig(resolution_w=8, resolution_h=8, forced_frame_delta=0.0)

    def test_frozen(self):
        config = SessionConfig.default()
        with pytest.raises(AttributeError):
            config.multithreaded = False

    @pytest.mark.parametrize(
        "width, height, expected",
        [
            (100, 100, (104, 104)),
            (0, 1, (8, 8)),
            (-50, 12.9, (8, 16)),
            (100000, 8193, (MAX_RESOLUTION, MAX_RESOLUTION)),
        ],
    )
    def test_with_resolution(self, width, height, expected):
        config = SessionConfig.default().with_resolution(width, height)
        assert (config.resolution_w, config.resolution_h) == expected
        assert config.resolution_w % config.tile_size == 0

    @pytest.mark.parametrize(
        "fps, expected", [(60.0, 1 / 60), (0.5, 2.0), (0.0, None), (-30.0, None)]
    )
    def test_with_framerate(self, fps, expected):
        assert SessionConfig.default().with_framerate(fps).forced_frame_delta == expected

    def test_with_multithreading_returns_copy(self):
        config = SessionConfig.default()
        updated = config.with_multithreading(False)
        assert config.multithreaded is True
        assert updated.multithreaded is False

    def test_json(self):
        config = SessionConfig.default().with_framerate(4.0)
        decoded = msgspec.json.decode(msgspec.json.encode(config), type=SessionConfig)
        assert decoded == config


class TestHarnessConfig:
    def test_defaults(self):
        harness = HarnessConfig()
        assert harness.tile_size == 8
        assert harness.max_workers is None
        assert harness.dialect is KernelDialect.NUMBA

    @pytest.mark.parametrize("kwargs", [{"tile_size": 0}, {"max_workers": 0}])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            HarnessConfig(**kwargs)


def test_round_up_to_tile():
    assert round_up_to_tile(9, 4) == 12
    assert round_up_to_tile(12, 4) == 12
