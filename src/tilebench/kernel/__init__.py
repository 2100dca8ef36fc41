"""Kernel provider: parameter block and source compiler."""

from .compiler import (
    KernelCompiler as KernelCompiler,
)
from .compiler import (
    KernelHandle as KernelHandle,
)
from .compiler import (
    read_kernel_source as read_kernel_source,
)
from .params import (
    GlobalParams as GlobalParams,
)
from .params import (
    allocate_pixels as allocate_pixels,
)
