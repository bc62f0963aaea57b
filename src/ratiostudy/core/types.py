"""Type aliases for ratiostudy."""

from typing import TypeAlias, Union

import numpy as np
from numpy.typing import NDArray

# Array types
FloatArray: TypeAlias = NDArray[np.float64]
IndexArray: TypeAlias = NDArray[np.intp]

# One raw (sale price, assessed value) row as handed over by a caller
RawValue: TypeAlias = Union[str, float, int, None]
RawPair: TypeAlias = tuple[RawValue, RawValue]
