"""
Hardware detection and device management for the torch vendor backend.

Provides a unified interface for detecting which devices a torch sparse
mat-vec can run on. The scipy vendor and the internal kernels always run on
the CPU and never consult this module.
"""

from dataclasses import dataclass
from typing import Literal
import platform
import warnings

from pyqpalgebra.core.exceptions import BackendUnavailableError


DeviceChoice = Literal['cpu', 'cuda', 'mps', 'auto']


@dataclass(frozen=True)
class DeviceInfo:
    """
    Information about a compute device.

    Attributes:
        device_type: Type of device ('cpu', 'cuda', 'mps')
        device_index: Device index (None for CPU)
        name: Human-readable device name
        supports_fp64: Whether float64 sparse mat-vec is available
    """
    device_type: Literal['cpu', 'cuda', 'mps']
    device_index: int | None
    name: str
    supports_fp64: bool

    def __str__(self) -> str:
        if self.device_type == 'cpu':
            return f"CPU ({self.name})"
        return f"{self.device_type.upper()}:{self.device_index} ({self.name})"

    @property
    def is_gpu(self) -> bool:
        """True if this is a GPU device."""
        return self.device_type in ('cuda', 'mps')

    @property
    def torch_device(self) -> str:
        """Device string understood by torch.device()."""
        if self.device_index is None:
            return self.device_type
        return f"{self.device_type}:{self.device_index}"


def torch_available() -> bool:
    """True if PyTorch can be imported."""
    try:
        import torch  # noqa: F401
    except ImportError:
        return False
    return True


def detect_gpu() -> DeviceInfo | None:
    """
    Detect available GPU, if any.

    Returns:
        DeviceInfo for the best available GPU, or None if no GPU available.

    Priority: CUDA > MPS (Apple Silicon)

    Note:
        This function imports torch lazily to avoid import overhead
        when only the scipy vendor is used.
    """
    try:
        import torch
    except ImportError:
        return None

    if torch.cuda.is_available():
        idx = torch.cuda.current_device()
        props = torch.cuda.get_device_properties(idx)
        return DeviceInfo(
            device_type='cuda',
            device_index=idx,
            name=props.name,
            supports_fp64=True,
        )

    if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
        return DeviceInfo(
            device_type='mps',
            device_index=0,
            name='Apple Silicon GPU',
            supports_fp64=False,  # MPS has no float64
        )

    return None


def get_cpu_info() -> DeviceInfo:
    """Get CPU device info."""
    processor = platform.processor()
    if not processor:
        processor = platform.machine() or "Unknown CPU"

    return DeviceInfo(
        device_type='cpu',
        device_index=None,
        name=processor,
        supports_fp64=True,
    )


def select_device(prefer: DeviceChoice = 'auto') -> DeviceInfo:
    """
    Select the device a torch vendor backend should run on.

    Args:
        prefer: Device preference
            - 'cpu': Always use CPU
            - 'cuda' / 'mps': Require that GPU (raises if unavailable)
            - 'auto': Use a GPU if available, else CPU with a RuntimeWarning

    Returns:
        DeviceInfo for selected device

    Raises:
        BackendUnavailableError: If a specific GPU was requested but is not
            available
        ValueError: If prefer is not a known device string
    """
    if prefer == 'cpu':
        return get_cpu_info()

    if prefer not in ('cuda', 'mps', 'auto'):
        raise ValueError(f"Unknown device: {prefer!r}. Use 'cpu', 'cuda', 'mps' or 'auto'.")

    gpu = detect_gpu()

    if prefer in ('cuda', 'mps'):
        if gpu is None or gpu.device_type != prefer:
            raise BackendUnavailableError(
                f"{prefer.upper()} requested but not available. "
                "Ensure PyTorch is installed with matching GPU support, "
                "or use device='cpu'.",
                backend='torch',
                device=prefer,
            )
        return gpu

    if gpu is None:
        warnings.warn("No GPU available, torch vendor runs on CPU", RuntimeWarning)
        return get_cpu_info()
    return gpu
