"""
Compositing operators.

Colors are non-premultiplied float planes; ``Cb``/``Ab`` are the backdrop
color and alpha, ``Cs``/``As`` the source color and effective alpha.
"""

import logging

import numpy as np

from photobooth.composite.utils import divide, union

logger = logging.getLogger(__name__)


def source_over(Cb, Ab, Cs, As):
    """
    Porter-Duff source-over.

    :return: tuple of the resulting color and alpha planes.
    """
    A = union(Ab, As)
    C = divide(Cs * As + Cb * Ab * (1.0 - As), A)
    C = np.where(A > 0, C, Cb)
    return C.astype(np.float32), np.asarray(A, dtype=np.float32)
