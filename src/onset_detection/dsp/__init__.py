"""Signal-processing building blocks: windows, FFT adapter, phase wrap, frame buffer."""

from onset_detection.dsp.frame_buffer import AnalysisFrame, SpectralFrame, SpectralHistory
from onset_detection.dsp.phase import princarg, wrap_phase
from onset_detection.dsp.transform import FFTTransform
from onset_detection.dsp.windows import generate_window

__all__ = [
    "AnalysisFrame",
    "FFTTransform",
    "SpectralFrame",
    "SpectralHistory",
    "generate_window",
    "princarg",
    "wrap_phase",
]
