
# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Runtime settings for Resume Studio.

Values come from environment variables and can be overridden from the CLI.
CA bundle lookup order for outbound HTTPS (proxy environments):
  1. Explicit override via --ca-bundle
  2. REQUESTS_CA_BUNDLE
  3. CURL_CA_BUNDLE
  4. SSL_CERT_FILE
  5. System defaults (True)
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MODELS = {
    "gemini": "gemini-1.5-flash",
    "openai": "gpt-4o-mini",
}

# Job descriptions shorter than this are rejected before any request is made
MIN_JOB_DESCRIPTION_LENGTH = 50

CA_BUNDLE_ENV_VARS = ("REQUESTS_CA_BUNDLE", "CURL_CA_BUNDLE", "SSL_CERT_FILE")


@dataclass
class Settings:
    provider: str = "gemini"
    model: str = ""
    gemini_api_key: str = ""
    openai_api_key: str = ""
    output_dir: Path = field(default_factory=lambda: Path("user_content/exports"))
    ca_bundle: str = ""

    def __post_init__(self):
        self.provider = (self.provider or "gemini").lower()
        if not self.model:
            self.model = DEFAULT_MODELS.get(self.provider, DEFAULT_MODELS["gemini"])
        self.output_dir = Path(self.output_dir)

    @property
    def api_key(self) -> str:
        if self.provider == "openai":
            return self.openai_api_key
        return self.gemini_api_key

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """Builds settings from the environment; non-empty overrides win."""
        values = {
            "provider": os.environ.get("RESUME_STUDIO_PROVIDER", "gemini"),
            "model": os.environ.get("RESUME_STUDIO_MODEL", ""),
            "gemini_api_key": os.environ.get("GEMINI_API_KEY", ""),
            "openai_api_key": os.environ.get("OPENAI_API_KEY", ""),
            "output_dir": os.environ.get("RESUME_STUDIO_OUTPUT_DIR", "user_content/exports"),
        }
        values.update({k: v for k, v in overrides.items() if v})
        return cls(**values)

    def get_ca_bundle(self) -> str | bool:
        """
        Resolve the CA bundle to use for outbound HTTPS requests.

        Returns:
            str: Path to a CA bundle file, or
            bool: True to use the default system/certifi trust store.
        """
        if self.ca_bundle:
            return self.ca_bundle

        for var in CA_BUNDLE_ENV_VARS:
            value = os.environ.get(var)
            if value:
                logger.debug(f"Using CA bundle from {var}: {value}")
                return value

        return True

    def configure_ssl_env(self) -> None:
        """
        Exports SSL_CERT_FILE when a custom bundle is configured, so the
        httpx-based SDKs (Google GenAI, OpenAI) pick it up.
        """
        bundle = self.get_ca_bundle()
        if isinstance(bundle, str) and os.environ.get("SSL_CERT_FILE") != bundle:
            os.environ["SSL_CERT_FILE"] = bundle
            logger.debug(f"Set SSL_CERT_FILE={bundle} for SDK clients")
