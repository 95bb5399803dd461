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

from torch import Tensor

from . import modules as nn


def agcep(
    x: Tensor, cep_order: int, num_stage: int = 1, **kwargs
) -> tuple[Tensor, Tensor]:
    """Perform adaptive generalized cepstral analysis.

    Parameters
    ----------
    x : Tensor [shape=(T,)]
        The input waveform.

    cep_order : int >= 0
        The order of the generalized cepstrum, :math:`M`.

    num_stage : int >= 1
        The number of stages, :math:`C`.

    **kwargs : additional keyword arguments
        See :class:`~adaptsptk.AdaptiveGeneralizedCepstralAnalysis`.

    Returns
    -------
    e : Tensor [shape=(T,)]
        The prediction error.

    c : Tensor [shape=(T/P, M+1)]
        The generalized cepstrum.

    """
    return nn.AdaptiveGeneralizedCepstralAnalysis(
        cep_order, num_stage=num_stage, **kwargs
    )(x)


def amcep(
    x: Tensor, cep_order: int, alpha: float = 0, **kwargs
) -> tuple[Tensor, Tensor]:
    """Perform adaptive mel-cepstral analysis.

    Parameters
    ----------
    x : Tensor [shape=(T,)]
        The input waveform.

    cep_order : int >= 0
        The order of the mel-cepstrum, :math:`M`.

    alpha : float in (-1, 1)
        The frequency warping factor, :math:`\\alpha`.

    **kwargs : additional keyword arguments
        See :class:`~adaptsptk.AdaptiveMelCepstralAnalysis`.

    Returns
    -------
    e : Tensor [shape=(T,)]
        The prediction error.

    mc : Tensor [shape=(T/P, M+1)]
        The mel-cepstrum.

    """
    return nn.AdaptiveMelCepstralAnalysis(cep_order, alpha=alpha, **kwargs)(x)


def b2mc(b: Tensor, alpha: float = 0) -> Tensor:
    """Convert MLSA filter coefficients to mel-cepstrum.

    Parameters
    ----------
    b : Tensor [shape=(..., M+1)]
        The MLSA filter coefficients.

    alpha : float in (-1, 1)
        The frequency warping factor, :math:`\\alpha`.

    Returns
    -------
    out : Tensor [shape=(..., M+1)]
        The mel-cepstral coefficients.

    """
    return nn.MLSADigitalFilterCoefficientsToMelCepstrum._func(b, alpha=alpha)


def ignorm(y: Tensor, gamma: float = 0, c: int | None = None) -> Tensor:
    """Perform cepstrum inverse gain normalization.

    Parameters
    ----------
    y : Tensor [shape=(..., M+1)]
        The normalized generalized cepstrum.

    gamma : float in [-1, 1]
        The gamma parameter, :math:`\\gamma`.

    c : int >= 1 or None
        The number of filter stages.

    Returns
    -------
    out : Tensor [shape=(..., M+1)]
        The generalized cepstrum.

    """
    return nn.GeneralizedCepstrumInverseGainNormalization._func(y, gamma=gamma, c=c)


def mlsadf(
    x: Tensor, b: Tensor, alpha: float = 0, pade_order: int = 4
) -> Tensor:
    """Apply an MLSA digital filter sample by sample.

    Parameters
    ----------
    x : Tensor [shape=(T,)]
        The excitation signal.

    b : Tensor [shape=(M+1,)] or [shape=(T, M+1)]
        The MLSA filter coefficients.

    alpha : float in (-1, 1)
        The frequency warping factor, :math:`\\alpha`.

    pade_order : int in [4, 7]
        The order of the Pade approximation.

    Returns
    -------
    out : Tensor [shape=(T,)]
        The output signal.

    """
    return nn.MLSADigitalFilter(b.size(-1) - 1, alpha, pade_order)(x, b)
