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

import torch
import torch.nn.functional as F

from ..typing import Precomputed
from ..utils.private import check_size, filter_values
from .base import BaseFunctionalModule


class MLSADigitalFilterCoefficientsToMelCepstrum(BaseFunctionalModule):
    """See `this page <https://sp-nitech.github.io/sptk/latest/main/b2mc.html>`_
    for details.

    Parameters
    ----------
    cep_order : int >= 0
        The order of the cepstrum, :math:`M`.

    alpha : float in (-1, 1)
        The frequency warping factor, :math:`\\alpha`.

    References
    ----------
    .. [1] K. Tokuda et al., "Spectral estimation of speech by mel-generalized cepstral
           analysis," *Electronics and Communications in Japan, part 3*, vol. 76, no. 2,
           pp. 30-43, 1993.

    """

    def __init__(self, cep_order: int, alpha: float = 0) -> None:
        super().__init__()

        self.in_dim = cep_order + 1

        self.values = self._precompute(**filter_values(locals()))

    def forward(self, b: torch.Tensor) -> torch.Tensor:
        """Convert MLSA filter coefficients to mel-cepstrum.

        Parameters
        ----------
        b : Tensor [shape=(..., M+1)]
            The MLSA filter coefficients.

        Returns
        -------
        out : Tensor [shape=(..., M+1)]
            The mel-cepstral coefficients.

        Examples
        --------
        >>> import adaptsptk
        >>> b = adaptsptk.ramp(4)
        >>> b2mc = adaptsptk.MLSADigitalFilterCoefficientsToMelCepstrum(4, 0.3)
        >>> mc = b2mc(b)
        >>> mc
        tensor([0.3000, 1.6000, 2.9000, 4.2000, 4.0000])

        """
        check_size(b.size(-1), self.in_dim, "dimension of cepstrum")
        return self._forward(b, *self.values)

    @staticmethod
    def _func(b: torch.Tensor, *args, **kwargs) -> torch.Tensor:
        values = MLSADigitalFilterCoefficientsToMelCepstrum._precompute(
            b.size(-1) - 1, *args, **kwargs
        )
        return MLSADigitalFilterCoefficientsToMelCepstrum._forward(b, *values)

    @staticmethod
    def _takes_input_size() -> bool:
        return True

    @staticmethod
    def _check(cep_order: int, alpha: float) -> None:
        if cep_order < 0:
            raise ValueError("cep_order must be non-negative.")
        if 1 <= abs(alpha):
            raise ValueError("alpha must be in (-1, 1).")

    @staticmethod
    def _precompute(cep_order: int, alpha: float) -> Precomputed:
        MLSADigitalFilterCoefficientsToMelCepstrum._check(cep_order, alpha)
        return (alpha,)

    @staticmethod
    def _forward(b: torch.Tensor, alpha: float) -> torch.Tensor:
        return b + F.pad(alpha * b[..., 1:], (0, 1))
