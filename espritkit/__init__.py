from .config import ReaderSettings
from .io import FormatError, decode_bruker_txt, is_bruker_txt, read_bruker_txt, read_spectrum
from .properties import MN_KA_ENERGY, SpectrumProperty
from .spectrum import EDSSpectrum

__version__ = "0.1.0"
__author__ = "Ettore Rocchi"

__all__ = [
    "EDSSpectrum",
    "SpectrumProperty",
    "MN_KA_ENERGY",
    "ReaderSettings",
    "FormatError",
    "is_bruker_txt",
    "decode_bruker_txt",
    "read_bruker_txt",
    "read_spectrum",
    "__version__",
    "__author__",
]
