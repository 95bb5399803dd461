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


class ConfigurationError(ValueError):
    """Raised when an analyzer is constructed with invalid parameters."""


class ArgumentError(ValueError):
    """Raised when a call receives a missing or malformed argument or buffer."""


class CollaboratorError(RuntimeError):
    """Raised when the filter or a coefficient converter rejects its input.

    The buffer passed to the failed call is left untouched, but the stream
    cannot be resumed safely since the adaptation is strictly sequential.
    """
