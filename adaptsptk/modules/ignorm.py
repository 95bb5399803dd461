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

from ..typing import Precomputed
from ..utils.private import check_size, filter_values, get_gamma, split_gain
from .base import BaseFunctionalModule


class GeneralizedCepstrumInverseGainNormalization(BaseFunctionalModule):
    """See `this page <https://sp-nitech.github.io/sptk/latest/main/ignorm.html>`_
    for details.

    Parameters
    ----------
    cep_order : int >= 0
        The order of the cepstrum, :math:`M`.

    gamma : float in [-1, 1]
        The gamma parameter, :math:`\\gamma`.

    c : int >= 1 or None
        The number of filter stages.

    References
    ----------
    .. [1] T. Kobayashi et al., "Spectral analysis using generalized cepstrum," *IEEE
           Transactions on Acoustics, Speech, and Signal Processing*, vol. 32, no. 5,
           pp. 1087-1089, 1984.

    """

    def __init__(self, cep_order: int, gamma: float = 0, c: int | None = None) -> None:
        super().__init__()

        self.in_dim = cep_order + 1

        self.values = self._precompute(**filter_values(locals()))

    def forward(self, y: torch.Tensor) -> torch.Tensor:
        """Perform cepstrum inverse gain normalization.

        Parameters
        ----------
        y : Tensor [shape=(..., M+1)]
            The normalized generalized cepstrum whose 0-th element is the gain.

        Returns
        -------
        out : Tensor [shape=(..., M+1)]
            The generalized cepstrum.

        Examples
        --------
        >>> import adaptsptk
        >>> y = adaptsptk.ramp(1, 4)
        >>> ignorm = adaptsptk.GeneralizedCepstrumInverseGainNormalization(3, c=2)
        >>> x = ignorm(y)
        >>> x
        tensor([0.0000, 2.0000, 3.0000, 4.0000])

        """
        check_size(y.size(-1), self.in_dim, "dimension of cepstrum")
        return self._forward(y, *self.values)

    @staticmethod
    def _func(y: torch.Tensor, *args, **kwargs) -> torch.Tensor:
        values = GeneralizedCepstrumInverseGainNormalization._precompute(
            y.size(-1) - 1, *args, **kwargs
        )
        return GeneralizedCepstrumInverseGainNormalization._forward(y, *values)

    @staticmethod
    def _takes_input_size() -> bool:
        return True

    @staticmethod
    def _check(cep_order: int, gamma: float, c: int | None) -> None:
        if cep_order < 0:
            raise ValueError("cep_order must be non-negative.")
        if 1 < abs(gamma):
            raise ValueError("gamma must be in [-1, 1].")
        if c is not None and c < 1:
            raise ValueError("c must be greater than or equal to 1.")

    @staticmethod
    def _precompute(cep_order: int, gamma: float, c: int | None = None) -> Precomputed:
        GeneralizedCepstrumInverseGainNormalization._check(cep_order, gamma, c)
        return (get_gamma(gamma, c),)

    @staticmethod
    def _forward(y: torch.Tensor, gamma: float) -> torch.Tensor:
        K, y = split_gain(y)
        if gamma == 0:
            x0 = torch.log(K)
            x1 = y
        else:
            z = torch.pow(K, gamma)
            x0 = (z - 1) / gamma
            x1 = y * z
        x = torch.cat((x0, x1), dim=-1)
        return x
