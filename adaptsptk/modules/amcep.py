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
import torch.nn.functional as F

from ..errors import ConfigurationError
from ..utils.private import check_shape, split_gain
from .adaptive import BaseAdaptiveModule
from .b2mc import MLSADigitalFilterCoefficientsToMelCepstrum
from .base import BaseBuffer
from .mlsadf import MLSADigitalFilter


class MelWarpedRegressor:
    """Generate the gradient direction through the first-order all-pass chain.

    Parameters
    ----------
    order : int >= 1
        The order of the mel-cepstrum, :math:`M`.

    alpha : float in (-1, 1)
        The frequency warping factor, :math:`\\alpha`.

    """

    def __init__(self, order: int, alpha: float) -> None:
        self.order = order
        self.alpha = alpha
        self.beta = 1 - alpha * alpha

    def __call__(self, phi: list[float], prev_e: float) -> None:
        """Update the regressor in place.

        Parameters
        ----------
        phi : list[float] [shape=(M+1,)]
            The regressor. After the update, ``phi[1:]`` is the gradient direction.

        prev_e : float
            The prediction error of the previous sample.

        """
        phi[0] = self.alpha * phi[0] + self.beta * prev_e
        for i in range(1, self.order):
            phi[i] += self.alpha * (phi[i + 1] - phi[i - 1])
        for i in range(self.order, 0, -1):
            phi[i] = phi[i - 1]


class AdaptiveMelCepstralAnalysis(BaseAdaptiveModule):
    """Adaptive mel-cepstral analysis. The MLSA digital filter coefficients are
    updated every sample so that the output of the inverse MLSA filter becomes
    white, and the mel-cepstrum is emitted after each update.

    Parameters
    ----------
    cep_order : int >= 0
        The order of the mel-cepstrum, :math:`M`.

    alpha : float in (-1, 1)
        The frequency warping factor, :math:`\\alpha`.

    pade_order : int in [4, 7]
        The order of the Pade approximation in the MLSA digital filter.

    min_epsilon : float > 0
        The lower bound of the power of the prediction error, :math:`\\epsilon_{min}`.

    momentum : float in [0, 1)
        The momentum of the gradient, :math:`\\tau`.

    forgetting_factor : float in [0, 1)
        The forgetting factor of the power estimate, :math:`\\lambda`.

    step_size_factor : float in (0, 1)
        The step-size factor, :math:`a`.

    frame_period : int >= 1
        The output period of the mel-cepstrum in :func:`forward`, :math:`P`.

    average : bool
        If True, :func:`forward` outputs the average mel-cepstrum over each frame
        period instead of the last one.

    verbose : bool or int
        If 1, logs the analysis; if 2, also shows a progress bar.

    References
    ----------
    .. [1] K. Tokuda et al., "Adaptive cepstral analysis of speech," *IEEE
           Transactions on Speech and Audio Processing*, vol. 3, no. 6, pp. 481-489,
           1995.

    """

    @dataclass
    class Buffer(BaseBuffer):
        mlsadf: MLSADigitalFilter.Buffer | None = None
        b: torch.Tensor | None = None
        phi: torch.Tensor | None = None
        gradient: torch.Tensor | None = None
        prev_prediction_error: float = 0.0
        epsilon: float = 0.0

    def __init__(
        self,
        cep_order: int,
        *,
        alpha: float = 0,
        pade_order: int = 4,
        min_epsilon: float = 1e-16,
        momentum: float = 0.9,
        forgetting_factor: float = 0.98,
        step_size_factor: float = 0.1,
        frame_period: int = 1,
        average: bool = False,
        verbose: bool | int = False,
    ) -> None:
        super().__init__(
            cep_order,
            min_epsilon,
            momentum,
            forgetting_factor,
            step_size_factor,
            frame_period,
            average,
            verbose,
        )

        try:
            self.mlsadf = MLSADigitalFilter(cep_order, alpha, pade_order)
            self.b2mc = MLSADigitalFilterCoefficientsToMelCepstrum(cep_order, alpha)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        self.alpha = alpha
        self.regressor = MelWarpedRegressor(cep_order, alpha)

    def new_buffer(self) -> "AdaptiveMelCepstralAnalysis.Buffer":
        M = self.cep_order
        return self.Buffer(
            is_ready=True,
            mlsadf=self.mlsadf.new_buffer(),
            b=torch.zeros(M + 1, dtype=torch.double),
            phi=torch.zeros(M + 1, dtype=torch.double),
            gradient=torch.zeros(M, dtype=torch.double),
        )

    def check_buffer(self, buffer: "AdaptiveMelCepstralAnalysis.Buffer") -> None:
        M = self.cep_order
        check_shape(buffer.b, (M + 1,), "filter coefficients")
        check_shape(buffer.phi, (M + 1,), "regressor")
        check_shape(buffer.gradient, (M,), "gradient")
        if not isinstance(buffer.mlsadf, MLSADigitalFilter.Buffer):
            raise ValueError("Filter buffer is missing.")
        if not buffer.mlsadf.is_ready:
            raise ValueError("Filter buffer is not initialized.")
        self.mlsadf.check_buffer(buffer.mlsadf)

    def _step(
        self, x: float, buffer: "AdaptiveMelCepstralAnalysis.Buffer"
    ) -> tuple[float, torch.Tensor]:
        _, b1 = split_gain(buffer.b)

        # Apply the inverse MLSA digital filter.
        inverse_b = F.pad(-b1, (1, 0))
        e = self._collaborate(
            self.mlsadf.step, inverse_b, x, buffer.mlsadf, name="MLSA digital filter"
        )

        b1 = b1.tolist()
        phi = buffer.phi.tolist()
        gradient = buffer.gradient.tolist()

        if 0 < self.cep_order:
            self.regressor(phi, buffer.prev_prediction_error)

        epsilon = self.power(buffer.epsilon, e)

        if 0 < self.cep_order:
            self.sgd(gradient, b1, e, phi[1:], epsilon)

        buffer.b = torch.tensor([0.5 * math.log(epsilon)] + b1, dtype=torch.double)
        buffer.phi = torch.tensor(phi, dtype=torch.double)
        buffer.gradient = torch.tensor(gradient, dtype=torch.double)
        buffer.prev_prediction_error = e
        buffer.epsilon = epsilon

        mc = self._collaborate(self.b2mc, buffer.b, name="b2mc")
        return e, mc

    def extra_repr(self) -> str:
        return f"{super().extra_repr()}, alpha={self.alpha}"
