# ------------------------------------------------------------------------ #
# Copyright 2022 SPTK Working Group                                        #
#                                                                          #
# Licensed under the Apache License, Version 2.0 (the "License");          #
# you may not use this file except in compliance with the License.         #
# You may obtain a copy of the License at                                  #
#                                                                          #
#     http://www.apache.org/licenses/LICENSE-2.0                           #
#                                                                          #
# Unless required by applicable law or agreed to in writing, software      #
# distributed under the License is distributed on an "AS IS" BASIS,        #
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. #
# See the License for the specific language governing permissions and      #
# limitations under the License.                                           #
# ------------------------------------------------------------------------ #

import math
from dataclasses import dataclass

import torch

from ..typing import Scalar, Signal
from ..utils.private import check_size, to
from .base import BaseBuffer, BaseNonFunctionalModule


def get_pade_coefficients(pade_order: int) -> list[float]:
    """Return the coefficients of the Pade approximation of the exponential.

    Parameters
    ----------
    pade_order : int in [4, 7]
        The order of the Pade approximation, :math:`L`.

    Returns
    -------
    out : list[float] [shape=(L+1,)]
        The coefficients, starting from the constant term.

    """
    # Orders 4 and 5 are tuned to minimize the maximum log approximation error.
    if pade_order == 4:
        return [1.0, 4.999273e-1, 1.067005e-1, 1.170221e-2, 5.656279e-4]
    elif pade_order == 5:
        return [1.0, 4.999391e-1, 1.107098e-1, 1.369984e-2, 9.564853e-4, 3.041721e-5]
    elif pade_order in (6, 7):
        L = pade_order
        return [
            math.factorial(2 * L - k)
            * math.factorial(L)
            / (math.factorial(2 * L) * math.factorial(k) * math.factorial(L - k))
            for k in range(L + 1)
        ]
    raise ValueError(f"pade_order {pade_order} is not supported.")


class MLSADigitalFilter(BaseNonFunctionalModule):
    """Sample-by-sample mel-log spectrum approximation (MLSA) digital filter.

    The filter realizes :math:`\\exp \\sum_{m=0}^M b(m) \\Phi_m(z)`, where
    :math:`\\Phi_m(z)` is built on the first-order all-pass function. The
    exponential is approximated by the Pade approximation in two cascaded
    stages, the first taking :math:`b(1)` and the second taking the rest.

    Parameters
    ----------
    filter_order : int >= 0
        The order of the filter, :math:`M`.

    alpha : float in (-1, 1)
        The frequency warping factor, :math:`\\alpha`.

    pade_order : int in [4, 7]
        The order of the Pade approximation.

    References
    ----------
    .. [1] S. Imai et al., "Mel log spectrum approximation (MLSA) filter for speech
           synthesis," *Electronics and Communications in Japan*, vol. 66, no. 2,
           pp. 11-18, 1983.

    """

    @dataclass
    class Buffer(BaseBuffer):
        d1: torch.Tensor | None = None
        p1: torch.Tensor | None = None
        d2: torch.Tensor | None = None
        p2: torch.Tensor | None = None

    def __init__(
        self, filter_order: int, alpha: float = 0, pade_order: int = 4
    ) -> None:
        super().__init__()

        self._check(filter_order, alpha, pade_order)

        self.filter_order = filter_order
        self.alpha = alpha
        self.beta = 1 - alpha * alpha
        self.pade_order = pade_order
        self.pade = get_pade_coefficients(pade_order)

    @staticmethod
    def _check(filter_order: int, alpha: float, pade_order: int) -> None:
        if filter_order < 0:
            raise ValueError("filter_order must be non-negative.")
        if 1 <= abs(alpha):
            raise ValueError("alpha must be in (-1, 1).")
        if not 4 <= pade_order <= 7:
            raise ValueError("pade_order must be in [4, 7].")

    def new_buffer(self) -> "MLSADigitalFilter.Buffer":
        """Allocate a zero-filled buffer for this filter."""
        L = self.pade_order
        M = self.filter_order
        return self.Buffer(
            is_ready=True,
            d1=torch.zeros(L + 1, dtype=torch.double),
            p1=torch.zeros(L + 1, dtype=torch.double),
            d2=torch.zeros(L, M + 2, dtype=torch.double),
            p2=torch.zeros(L + 1, dtype=torch.double),
        )

    def check_buffer(self, buffer: "MLSADigitalFilter.Buffer") -> None:
        L = self.pade_order
        M = self.filter_order
        expected = {"d1": (L + 1,), "p1": (L + 1,), "d2": (L, M + 2), "p2": (L + 1,)}
        for name, shape in expected.items():
            value = getattr(buffer, name)
            if value is None or tuple(value.shape) != shape:
                raise ValueError(f"Unexpected shape of filter buffer {name}.")

    def step(
        self, b: torch.Tensor, x: Scalar, buffer: "MLSADigitalFilter.Buffer"
    ) -> float:
        """Filter one sample.

        Parameters
        ----------
        b : Tensor [shape=(M+1,)]
            The MLSA filter coefficients.

        x : float
            The input sample.

        buffer : MLSADigitalFilter.Buffer
            The delay lines of the filter. It is updated in place.

        Returns
        -------
        out : float
            The output sample.

        """
        if b.dim() != 1:
            raise ValueError("Filter coefficients must be 1D.")
        check_size(b.size(-1), self.filter_order + 1, "dimension of coefficients")
        if buffer.is_ready:
            self.check_buffer(buffer)
        else:
            buffer.commit(self.new_buffer())

        b = b.tolist()
        x = float(x) * math.exp(b[0])
        if self.filter_order == 0:
            return x

        d1 = buffer.d1.tolist()
        p1 = buffer.p1.tolist()
        d2 = buffer.d2.tolist()
        p2 = buffer.p2.tolist()

        x = self._basic_stage(x, b[1], d1, p1)
        x = self._cascade_stage(x, b, d2, p2)

        buffer.d1 = torch.tensor(d1, dtype=torch.double)
        buffer.p1 = torch.tensor(p1, dtype=torch.double)
        buffer.d2 = torch.tensor(d2, dtype=torch.double)
        buffer.p2 = torch.tensor(p2, dtype=torch.double)
        return x

    def _basic_stage(
        self, x: float, b1: float, d: list[float], pt: list[float]
    ) -> float:
        y = 0.0
        for i in range(self.pade_order, 0, -1):
            d[i] = self.beta * pt[i - 1] + self.alpha * d[i]
            pt[i] = d[i] * b1
            v = pt[i] * self.pade[i]
            x = x + v if i % 2 == 1 else x - v
            y = y + v
        pt[0] = x
        y = y + x
        return y

    def _cascade_stage(
        self, x: float, b: list[float], d: list[list[float]], pt: list[float]
    ) -> float:
        y = 0.0
        for i in range(self.pade_order, 0, -1):
            pt[i] = self._fir(pt[i - 1], b, d[i - 1])
            v = pt[i] * self.pade[i]
            x = x + v if i % 2 == 1 else x - v
            y = y + v
        pt[0] = x
        y = y + x
        return y

    def _fir(self, x: float, b: list[float], d: list[float]) -> float:
        M = self.filter_order
        d[0] = x
        d[1] = self.beta * d[0] + self.alpha * d[1]
        for i in range(2, M + 1):
            d[i] += self.alpha * (d[i + 1] - d[i - 1])
        y = 0.0
        for i in range(2, M + 1):
            y = y + d[i] * b[i]
        for i in range(M + 1, 1, -1):
            d[i] = d[i - 1]
        return y

    def forward(self, x: Signal, b: torch.Tensor) -> torch.Tensor:
        """Apply an MLSA digital filter to a whole waveform.

        Parameters
        ----------
        x : Tensor [shape=(T,)]
            The excitation signal.

        b : Tensor [shape=(M+1,)] or [shape=(T, M+1)]
            The MLSA filter coefficients, fixed or given sample by sample.

        Returns
        -------
        out : Tensor [shape=(T,)]
            The output signal.

        Examples
        --------
        >>> import adaptsptk
        >>> import torch
        >>> x = adaptsptk.impulse(3)
        >>> mlsadf = adaptsptk.MLSADigitalFilter(1, pade_order=6)
        >>> y = mlsadf(x, torch.tensor([0.0, 0.5]))
        >>> y
        tensor([1.0000, 0.5000, 0.1250, 0.0208])

        """
        dtype = x.dtype if torch.is_tensor(x) else None
        x = to(x, dtype=torch.double)
        if x.dim() != 1:
            raise ValueError("Input signal must be 1D.")
        if b.dim() == 1:
            b = b.expand(len(x), -1)
        check_size(len(b), len(x), "number of filter coefficients")

        buffer = self.new_buffer()
        y = [self.step(b[t], x[t], buffer) for t in range(len(x))]
        return to(torch.tensor(y, dtype=torch.double), device=x.device, dtype=dtype)
