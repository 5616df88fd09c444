"""Streaming onset detection function engine.

One call per hop: shift the new samples into the analysis frame, window
and FFT it (spectral variants only), then reduce it to a single onset
strength value with the selected detection function.

The frame is windowed and its two halves swapped before the FFT so the
phase reference sits at the frame centre (zero-phase windowing).
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import numpy as np

from onset_detection.config import DEFAULT_CONFIG, DetectionConfig
from onset_detection.detection.functions import SPECTRAL_FUNCTIONS, TIME_DOMAIN_FUNCTIONS
from onset_detection.dsp.frame_buffer import AnalysisFrame, SpectralFrame, SpectralHistory
from onset_detection.dsp.transform import FFTTransform
from onset_detection.dsp.windows import generate_window
from onset_detection.errors import EngineStateError
from onset_detection.types import DetectionFunctionType, WindowType

logger = logging.getLogger(__name__)


class OnsetDetectionFunction:
    """Computes one onset detection function sample per hop of audio.

    Interface:
      odf = OnsetDetectionFunction(512, 1024, "complex_spectral_difference_hwr")
      value = odf.compute_sample(hop)   # hop: 512 new samples
      odf.initialise(256, 512)          # new sizes, same variant/window
      odf.close()

    Not thread-safe; use one instance per stream.
    """

    def __init__(
        self,
        hop_size: int = 512,
        frame_size: int = 1024,
        detection_function_type: Union[DetectionFunctionType, str] = (
            DetectionFunctionType.COMPLEX_SPECTRAL_DIFFERENCE_HWR
        ),
        window_type: Union[WindowType, str] = WindowType.HANNING,
    ):
        self._fft = FFTTransform()
        self._closed = False
        self._apply(
            DetectionConfig(
                hop_size=hop_size,
                frame_size=frame_size,
                detection_function=detection_function_type,
                window=window_type,
            )
        )

    @classmethod
    def from_config(cls, config: DetectionConfig) -> "OnsetDetectionFunction":
        return cls(
            config.hop_size, config.frame_size, config.detection_function, config.window
        )

    def __enter__(self) -> "OnsetDetectionFunction":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def initialise(
        self,
        hop_size: int,
        frame_size: int,
        detection_function_type: Optional[Union[DetectionFunctionType, str]] = None,
        window_type: Optional[Union[WindowType, str]] = None,
    ) -> None:
        """Reconfigure and reset all state.

        Variant and window keep their current values unless given. The new
        configuration is validated before anything is torn down, so a
        rejected call leaves the engine untouched.
        """
        config = self.config.replace(
            hop_size=hop_size,
            frame_size=frame_size,
            detection_function=detection_function_type,
            window=window_type,
        )
        self._apply(config)

    def _apply(self, config: DetectionConfig) -> None:
        # old FFT buffers go before new ones are acquired
        self._fft.release()
        self._config = config
        self._window = generate_window(config.window, config.frame_size)
        self._frame = AnalysisFrame(config.frame_size, config.hop_size)
        self._history = SpectralHistory.zeros(config.frame_size)
        self._fft_input = np.zeros(config.frame_size, dtype=np.float64)
        self._fft.prepare(config.frame_size)
        self._closed = False
        logger.debug(
            "Initialised onset detection: hop=%d frame=%d function=%s window=%s",
            config.hop_size,
            config.frame_size,
            config.detection_function.value,
            config.window.value,
        )

    def set_detection_function_type(
        self, detection_function_type: Union[DetectionFunctionType, str]
    ) -> None:
        """Switch variant in place; buffers and history are kept."""
        self._config = self.config.replace(detection_function=detection_function_type)

    def close(self) -> None:
        """Release FFT resources. Further compute_sample calls raise."""
        if self._closed:
            return
        self._fft.release()
        self._closed = True
        logger.debug("Closed onset detection function")

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def compute_sample(self, buffer: np.ndarray) -> float:
        """Push `hop_size` new samples and return the detection function value.

        Raises:
            EngineStateError: engine has been closed.
            InputSizeError: buffer length differs from hop_size; no state
                is modified in that case.
        """
        if self._closed:
            raise EngineStateError("compute_sample called on a closed engine")
        self._frame.push(buffer)
        kind = self.config.detection_function
        if kind.is_time_domain:
            return TIME_DOMAIN_FUNCTIONS[kind](self._frame.data, self._history)
        return SPECTRAL_FUNCTIONS[kind](self._spectrum(), self._history)

    def _spectrum(self) -> SpectralFrame:
        """Windowed, half-swapped FFT of the current frame."""
        half = self.frame_size // 2
        windowed = self._frame.data * self._window
        self._fft_input[:half] = windowed[half:]
        self._fft_input[half:] = windowed[:half]
        real, imag = self._fft.transform(self._fft_input)

        magnitude = np.empty(self.frame_size, dtype=np.float64)
        magnitude[: half + 1] = np.sqrt(real[: half + 1] ** 2 + imag[: half + 1] ** 2)
        # real input: upper bins mirror the lower half
        magnitude[half + 1 :] = magnitude[half - 1 : 0 : -1]
        phase = np.arctan2(imag, real)
        return SpectralFrame(magnitude=magnitude, phase=phase)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> DetectionConfig:
        return self._config

    @property
    def hop_size(self) -> int:
        return self.config.hop_size

    @property
    def frame_size(self) -> int:
        return self.config.frame_size

    @property
    def detection_function_type(self) -> DetectionFunctionType:
        return self.config.detection_function

    @property
    def window_type(self) -> WindowType:
        return self.config.window

    @property
    def window(self) -> np.ndarray:
        """Copy of the window coefficients."""
        return self._window.copy()

    @property
    def frame(self) -> np.ndarray:
        """Copy of the analysis frame."""
        return self._frame.get_all()

    @property
    def history(self) -> SpectralHistory:
        return self._history

    @property
    def is_ready(self) -> bool:
        return not self._closed


def compute_detection_function(
    signal: np.ndarray,
    config: Optional[DetectionConfig] = None,
) -> np.ndarray:
    """Run a fresh engine over a whole signal.

    Args:
        signal: Mono samples.
        config: Engine configuration (default DEFAULT_CONFIG).

    Returns:
        float64 array with one value per complete hop; a trailing partial
        hop is dropped.
    """
    config = config or DEFAULT_CONFIG
    signal = np.asarray(signal, dtype=np.float64).reshape(-1)
    n_hops = signal.shape[0] // config.hop_size
    out = np.zeros(n_hops, dtype=np.float64)
    with OnsetDetectionFunction.from_config(config) as odf:
        for i in range(n_hops):
            start = i * config.hop_size
            out[i] = odf.compute_sample(signal[start : start + config.hop_size])
    return out
