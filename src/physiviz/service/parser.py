"""
Natural-language problem parsing.

Free-form problem text goes to a hosted language model, which answers with a
loosely structured JSON "solution". That answer is normalised into a
``ProblemDescription``:

1. ``extract_json`` pulls the JSON object out of the raw reply
2. ``transform_response`` maps domain, formulas and unknowns to a motion type
   and reads the extracted values under their common aliases

The model is only ever reached through ``OpenRouterClient.complete``, so
tests swap in any object with the same method.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Protocol

import requests

from physiviz.problem import FORCE_TAGS, MotionType, ProblemDescription, ProblemFormatError

from .config import Settings
from .config import get_settings
from .prompts import SYSTEM_PROMPT, user_prompt

log = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```json\s*\n([\s\S]*?)\n\s*```")

VELOCITY_KEYS = ("velocity", "v", "initial_velocity", "v0")
ANGLE_KEYS = ("angle", "θ", "theta")
HEIGHT_KEYS = ("height", "h")
RADIUS_KEYS = ("radius", "r")
ACCELERATION_KEYS = ("acceleration", "a")
GRAVITY_KEYS = ("gravity", "g")
MASS_KEYS = ("mass", "m", "m1")

FORCE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "gravity": ("gravity", "gravitational", "weight", "mg", "free fall", "projectile", "falls", "dropped"),
    "normal": ("normal force", "normal reaction", "n = mg", "surface", "incline"),
    "tension": ("tension", "rope", "string", "cable"),
    "applied": ("applied", "push", "pull", "f = ma"),
    "friction": ("friction", "μ", "coefficient of kinetic", "coefficient of static"),
}


class ServiceError(RuntimeError):
    """The parse service could not produce a problem."""


class ServiceConfigurationError(ServiceError):
    """The language-model provider is not configured (no API key)."""


class ProblemRejectedError(ServiceError):
    """The model reported that the text is not a solvable problem."""


class CompletionClient(Protocol):
    def complete(self, problem_text: str) -> str: ...


# -----------------------------------------------------------------------------
# JSON extraction
# -----------------------------------------------------------------------------

def tidy_json(txt: str) -> str:
    """Common fixes: smart quotes and trailing commas."""
    txt = txt.replace("“", '"').replace("”", '"').replace("’", "'").replace("‘", "'")
    txt = re.sub(r",\s*}", "}", txt)
    txt = re.sub(r",\s*]", "]", txt)
    return txt


def extract_json(text: str) -> dict[str, Any]:
    """
    Parse a model reply into a JSON object.

    Tries the reply as-is, then the first fenced ```json block, then a tidied
    version of either.

    Raises
    ------
    ProblemFormatError
        If no JSON object can be recovered.
    """
    raw = text.strip()
    candidates = [raw]
    match = _FENCED_JSON.search(raw)
    if match:
        candidates.append(match.group(1))
    candidates.extend(tidy_json(c) for c in list(candidates))

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    raise ProblemFormatError("Invalid JSON in model response")


# -----------------------------------------------------------------------------
# Response normalisation
# -----------------------------------------------------------------------------

def _lower_join(items: Any) -> str:
    if not isinstance(items, list):
        return ""
    return " ".join(str(i).lower() for i in items)


def map_motion_type(response: dict[str, Any]) -> MotionType:
    """
    Classify a model response into a motion type.

    Precedence: collision, circular, free fall (unless the body is thrown or
    moves horizontally), projectile, then linear acceleration as the default.
    """
    domain = str(response.get("domain") or "").lower()
    unknowns = _lower_join(response.get("unknowns"))
    formulas = _lower_join(response.get("formulas_used"))
    description = str(response.get("problem_description") or "").lower()

    if "collision" in domain or ("velocity" in unknowns and "collision" in unknowns):
        return MotionType.COLLISION_1D

    if "circular" in domain or "centripetal" in formulas or "centripetal" in unknowns:
        return MotionType.CIRCULAR

    if "free fall" in domain or "drop" in description or "falls from" in description:
        if "horizontal" not in description and "thrown" not in description:
            return MotionType.FREE_FALL

    if (
        "range" in formulas
        or "distance" in unknowns
        or "horizontal" in unknowns
        or "thrown" in description
        or "horizontal" in description
        or "angle" in description
    ):
        return MotionType.PROJECTILE

    return MotionType.LINEAR_ACCELERATION


def _number(entry: Any) -> float | None:
    if isinstance(entry, dict):
        entry = entry.get("value")
    if isinstance(entry, bool):
        return None
    if isinstance(entry, (int, float)):
        return float(entry)
    if isinstance(entry, str):
        try:
            return float(entry.strip())
        except ValueError:
            return None
    return None


def _first(values: dict[str, Any], keys: tuple[str, ...]) -> float | None:
    for key in keys:
        v = _number(values.get(key))
        if v is not None:
            return v
    return None


def extract_conditions(values: Any) -> dict[str, float]:
    """Initial conditions found in ``extracted_values`` under their aliases."""
    if not isinstance(values, dict):
        return {}
    found: dict[str, float] = {}
    for field, keys in (
        ("velocity", VELOCITY_KEYS),
        ("angle", ANGLE_KEYS),
        ("height", HEIGHT_KEYS),
        ("radius", RADIUS_KEYS),
        ("acceleration", ACCELERATION_KEYS),
        ("gravity", GRAVITY_KEYS),
        ("v1", ("v1",)),
        ("v2", ("v2",)),
    ):
        v = _first(values, keys)
        if v is not None:
            found[field] = v
    for field in ("m1", "m2"):
        v = _number(values.get(field))
        if v is not None and v > 0:
            found[field] = v
    # Negative inputs are out of the schema's range; keep the defaults instead
    for field in ("gravity", "height", "radius"):
        if field in found and found[field] < 0:
            del found[field]
    return found


def extract_objects(values: Any) -> list[dict[str, Any]]:
    mass = _first(values, MASS_KEYS) if isinstance(values, dict) else None
    if mass is None or mass <= 0:
        mass = 1.0
    return [{"name": "Object", "mass": mass}]


def infer_forces(response: dict[str, Any], motion_type: MotionType) -> list[str]:
    """
    Force tags mentioned in the response text.

    Bodies in flight always carry gravity.
    """
    text = " ".join(
        [
            str(response.get("domain") or ""),
            str(response.get("problem_description") or ""),
            _lower_join(response.get("formulas_used")),
        ]
    ).lower()
    forces = [tag for tag in FORCE_TAGS if any(k in text for k in FORCE_KEYWORDS[tag])]
    if motion_type in (MotionType.PROJECTILE, MotionType.FREE_FALL) and "gravity" not in forces:
        forces.insert(0, "gravity")
    return forces


def _steps(raw: Any) -> list[dict[str, Any]]:
    if not isinstance(raw, list):
        return []
    steps = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        steps.append(
            {
                "step": item.get("step") or "",
                "explanation": item.get("explanation") or "",
                "formula": item.get("formula") or "",
                "value": item.get("value") or "",
            }
        )
    return steps


def _strings(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [str(x) for x in raw if x is not None]


def transform_response(response: dict[str, Any]) -> ProblemDescription:
    """
    Normalise a model response into a ``ProblemDescription``.

    Raises
    ------
    ProblemFormatError
        If the normalised problem fails validation.
    """
    motion_type = map_motion_type(response)
    values = response.get("extracted_values")
    payload = {
        "title": response.get("domain") or "Physics Problem",
        "description": response.get("problem_description") or "",
        "motion_type": motion_type.value,
        "objects": extract_objects(values),
        "initial_conditions": extract_conditions(values),
        "forces": infer_forces(response, motion_type),
        "equations": _strings(response.get("formulas_used")),
        "unknowns": _strings(response.get("unknowns")),
        "solution_steps": _steps(response.get("calculation_steps")),
    }
    return ProblemDescription.from_payload(payload)


# -----------------------------------------------------------------------------
# Network clients
# -----------------------------------------------------------------------------

def _error_message(resp: requests.Response | None, fallback: str) -> str:
    if resp is None:
        return fallback
    try:
        body = resp.json()
    except ValueError:
        return fallback
    err = body.get("error") if isinstance(body, dict) else None
    if isinstance(err, dict):
        return str(err.get("message") or fallback)
    if err:
        return str(err)
    return fallback


class OpenRouterClient:
    """
    Chat-completion client for the hosted language model.

    One POST per request; failures are reported, never retried.

    Parameters
    ----------
    settings : Settings | None
        Service settings. Defaults to the environment-derived settings.
    session : requests.Session | None
        HTTP session (a fresh module-level ``requests.post`` when omitted).
    """

    def __init__(self, settings: Settings | None = None, session: requests.Session | None = None) -> None:
        self.settings = settings if settings is not None else get_settings()
        self.session = session

    def payload(self, problem_text: str) -> dict[str, Any]:
        s = self.settings
        return {
            "model": s.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt(problem_text)},
            ],
            "temperature": s.temperature,
            "max_tokens": s.max_tokens,
        }

    def complete(self, problem_text: str) -> str:
        """
        Send the problem and return the raw reply text.

        Raises
        ------
        ServiceConfigurationError
            If no API key is configured.
        ServiceError
            On transport failures, HTTP errors or a malformed reply.
        """
        s = self.settings
        if not s.configured:
            raise ServiceConfigurationError("OPENROUTER_API_KEY not set")

        headers = {
            "Authorization": f"Bearer {s.api_key}",
            "HTTP-Referer": s.referer,
            "X-Title": s.app_title,
        }
        post = self.session.post if self.session is not None else requests.post
        log.info("Calling %s with model %s", s.api_url, s.model)
        resp: requests.Response | None = None
        try:
            resp = post(s.api_url, json=self.payload(problem_text), headers=headers, timeout=s.timeout)
            resp.raise_for_status()
            content = resp.json()["choices"][0]["message"]["content"]
        except requests.RequestException as exc:
            raise ServiceError(_error_message(resp, str(exc))) from exc
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise ServiceError(f"Malformed completion response: {exc}") from exc
        log.info("Received response (%d chars)", len(content))
        return content


def parse_problem(problem_text: str, client: CompletionClient | None = None) -> ProblemDescription:
    """
    Turn problem text into a structured problem.

    Raises
    ------
    ProblemFormatError
        If the text is blank or the reply cannot be normalised.
    ProblemRejectedError
        If the model reports that the text is not a problem it can solve.
    ServiceError
        If the model cannot be reached.
    """
    if not problem_text or not problem_text.strip():
        raise ProblemFormatError("Problem text required")
    client = client if client is not None else OpenRouterClient()
    log.info('Problem: "%s..."', problem_text[:50])

    data = extract_json(client.complete(problem_text))
    if data.get("error"):
        raise ProblemRejectedError(str(data["error"]))

    problem = transform_response(data)
    log.info("Domain: %s -> %s", problem.title, problem.motion_type.value)
    return problem


class RemoteProblemParser:
    """
    Client for a running parse endpoint (``POST /api/parse``).

    Examples
    --------
    >>> parser = RemoteProblemParser("http://localhost:5000/api/parse")
    >>> problem = parser.parse("A ball is thrown ...")  # doctest: +SKIP
    """

    def __init__(self, url: str | None = None, timeout: float | None = None) -> None:
        if url is None or timeout is None:
            settings = get_settings()
            url = url or settings.parse_url
            timeout = timeout if timeout is not None else settings.timeout
        self.url = url
        self.timeout = timeout

    def parse(self, problem_text: str) -> ProblemDescription:
        """
        Raises
        ------
        ServiceError
            Carrying the server's ``error``/``message`` on any failure.
        """
        try:
            resp = requests.post(self.url, json={"problem": problem_text}, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ServiceError(f"Parse service unreachable: {exc}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise ServiceError(f"Parse service returned {resp.status_code} without JSON") from exc
        if not isinstance(body, dict):
            raise ServiceError(f"Parse service returned {resp.status_code} with an unexpected body")

        if not resp.ok or not body.get("success"):
            error = body.get("error") or f"HTTP {resp.status_code}"
            message = body.get("message")
            raise ServiceError(f"{error}: {message}" if message and message != error else str(error))
        return ProblemDescription.from_payload(body.get("result"))
