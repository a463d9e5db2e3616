"""
ndtensor: Contraction Operations

Computes the generalized tensor product of two tensors over an arbitrary number of
shared axes: the last ``degree`` axes of the basis against the first ``degree`` axes
of the factor. Degree 1 on two matrices is the matrix product, a degree equal to both
ranks is the full scalar contraction.

The default kernel walks a single odometer over the combined shape and keeps three
running keys (result, basis, factor), so the cost is one multiply-add per combined
multi-index and no index lists are materialised.

"""

import logging
import numpy as np
from typing import Tuple
from ...errors import InvalidDegree, ShapeMismatch
from ..shape.core_functions import is_integer
from ..tensor.constants import DEFAULT_USE_NUMBA, DTYPE
from .core_functions import *

logger = logging.getLogger(__name__)


class ContractionOperations:
    """
    A class to contract tensors over shared axes.
    No data objects. Only methods.

    Operands are duck-typed: anything exposing ``data``, ``size``, ``offset`` and
    ``dimension`` like Tensor does.

    """
    def __init__(
        self,
        use_numba : bool = DEFAULT_USE_NUMBA,
        backend : str = DEFAULT_BACKEND):
        """
        Initialize the ContractionOperations class.

        Args:
            use_numba (bool, optional): use the Numba single-pass kernel. Defaults to True.
            backend (str, optional): fallback when use_numba is False, either "python"
                                     (single-pass walk) or "numpy" (tensordot). Defaults to "python".
        """
        if backend not in BACKENDS:
            raise ValueError(f"backend must be one of {BACKENDS}. Got {backend!r}")
        self.use_numba = use_numba
        self.backend = backend
        logger.debug("ContractionOperations using %s kernel",
                     "numba" if use_numba else backend)


    @staticmethod
    def check_operands(
        basis,
        factor,
        degree : int) -> None:
        """
        Validate the preconditions of a contraction.

        Raises:
            InvalidDegree: if degree is not an integer >= 1 or exceeds either rank
            ShapeMismatch: if the trailing basis axes differ from the leading factor axes
        """
        if not is_integer(degree) or degree < 1:
            raise InvalidDegree(f"The degree of the product must be an integer > 0. Got {degree!r}")
        if degree > basis.dimension or degree > factor.dimension:
            raise InvalidDegree(
                f"The degree of the product must be equal or less than the tensors minimal dimension. "
                f"Got degree {degree} for dimensions {basis.dimension} and {factor.dimension}")
        if tuple(basis.size[basis.dimension - degree:]) != tuple(factor.size[:degree]):
            raise ShapeMismatch(
                f"The last {degree} axes of the basis size {list(basis.size)} must equal "
                f"the first {degree} axes of the factor size {list(factor.size)}")


    def contract(
        self,
        basis,
        factor,
        degree : int = DEFAULT_DEGREE) -> Tuple[Tuple[int, ...], np.ndarray]:
        """
        Contract the last degree axes of basis with the first degree axes of factor.

        Args:
            basis: tensor whose trailing axes are contracted
            factor: tensor whose leading axes are contracted
            degree (int, optional): number of contracted axes. Defaults to 1.

        Returns:
            result_size (Tuple[int, ...]): basis.size[:-degree] + factor.size[degree:];
                                           empty when both ranks equal degree
            out (np.ndarray): freshly allocated flat result (length 1 for an empty size)
        """
        self.check_operands(basis, factor, degree)
        result_size, combined_size, result_step_back = contraction_layout(
            basis.size, factor.size, factor.offset, degree)
        logger.debug("Contracting %s with %s over %d axes -> %s",
                     basis.size, factor.size, degree, result_size)

        if not self.use_numba and self.backend == "numpy":
            out = tensor_contraction_np_core(
                basis.data, basis.size, factor.data, factor.size, degree)
            return result_size, out

        out = np.zeros(max(1, int(np.prod(result_size, dtype=np.int64))), dtype=DTYPE)
        if self.use_numba:
            tensor_contraction_nb_core(
                basis.data,
                factor.data,
                np.asarray(combined_size, dtype=np.int64),
                basis.dimension,
                degree,
                result_step_back,
                out)
        else:
            tensor_contraction_py_core(
                basis.data,
                factor.data,
                combined_size,
                basis.dimension,
                degree,
                result_step_back,
                out)
        return result_size, out


    def reference(
        self,
        basis,
        factor,
        degree : int = DEFAULT_DEGREE) -> Tuple[Tuple[int, ...], np.ndarray]:
        """
        Same contract as ``contract`` computed by the quadratic reference kernel.
        """
        self.check_operands(basis, factor, degree)
        result_size, _, _ = contraction_layout(
            basis.size, factor.size, factor.offset, degree)
        out = tensor_contraction_naive_core(
            basis.data, basis.size, factor.data, factor.size, degree)
        return result_size, out
