from __future__ import annotations

from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike

from refidx_app.domain.models import FloatArray, IndexSettings


class SootModel:
    # Bond & Bergstrom (2006), Aerosol Sci. Technol. 40, 27-67, doi:10.1080/02786820500421521
    def __init__(self, settings: IndexSettings) -> None:
        self.settings = settings

    def evaluate(self, wavelengths: ArrayLike) -> Tuple[FloatArray, FloatArray]:
        shape = np.shape(wavelengths)
        n = np.full(shape, self.settings.soot_real_index, dtype=float)
        k = np.full(shape, self.settings.soot_imag_index, dtype=float)
        return n, k
