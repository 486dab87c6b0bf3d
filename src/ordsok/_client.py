"""DH-lab API client: build a corpus and evaluate wordbags against it."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping, Sequence
from typing import Any

import requests

from ._errors import DhlabClientError
from ._parsing import normalize_evaluation, parse_corpus_response, wordbags_payload
from ._types import Corpus, EvaluationResult, Wordbag

logger = logging.getLogger(__name__)


class DhlabClient:
    """Thin client for the two DH-lab endpoints the application uses.

    Requests are sent once; there is no retry and no authentication.
    """

    DEFAULT_API_URL = "https://api.nb.no/dhlab"
    DEFAULT_TIMEOUT = 60

    def __init__(
        self,
        *,
        api_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the client.

        Args:
            api_url: Base URL. Defaults to ORDSOK_API_URL, then the public API.
            timeout: Request timeout in seconds.
            session: Optional requests session (connection reuse, testing).
        """
        self.api_url = (
            api_url or os.environ.get("ORDSOK_API_URL") or self.DEFAULT_API_URL
        ).rstrip("/")
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self._session = session

    def _post(self, endpoint: str, payload: Mapping[str, Any]) -> Any:
        url = f"{self.api_url}/{endpoint}"
        poster = self._session.post if self._session is not None else requests.post
        logger.debug("POST %s", url)
        try:
            response = poster(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DhlabClientError(f"DH-lab request to {endpoint} failed: {exc}") from exc

        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            raise DhlabClientError(f"Invalid JSON from {endpoint}: {exc}") from exc

    def build_corpus(self, query: Mapping[str, Any]) -> Corpus:
        """Build a corpus from metadata filters (see parse_build_query)."""
        if not query:
            raise DhlabClientError("A metadata filter is required to build a corpus")
        data = self._post("build_corpus", query)
        corpus = parse_corpus_response(data)
        if not corpus.urns:
            logger.warning("build_corpus returned no URNs for %s", dict(query))
        else:
            logger.debug("build_corpus returned %d URNs", len(corpus.urns))
        return corpus

    def evaluate(
        self, urns: Sequence[str], wordbags: Sequence[Wordbag]
    ) -> EvaluationResult:
        """Count each wordbag in each document.

        Raises:
            DhlabClientError: On an empty corpus, no usable wordbags, or a
                failed request.
            OrdsokParseError: If the response cannot be normalized.
        """
        if not urns:
            raise DhlabClientError("Build or import a corpus first")
        payload = wordbags_payload(wordbags)
        if not payload:
            raise DhlabClientError("At least one named wordbag is required")

        data = self._post("evaluate", {"urns": list(urns), "wordbags": payload})
        result = normalize_evaluation(data)
        logger.debug("evaluate returned counts for %d documents", len(result))
        return result
