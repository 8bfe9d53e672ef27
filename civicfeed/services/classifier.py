# File: civicfeed/services/classifier.py
"""Maintenance-issue triage through Gemini, with a keyword fallback.

``Classifier.analyze`` never raises: a missing key, a transport error or
timeout, an empty / non-JSON reply or a reply that fails the schema all
resolve to ``fallback_analysis``.
"""
import base64
import json
import logging
import re
from typing import Any, Optional

from pydantic import ValidationError as SchemaError

from civicfeed.schemas.issue import AIAnalysis

logger = logging.getLogger("civicfeed.classifier")

DATA_URL_RE = re.compile(r"^data:([^;]+);base64,(.+)$", re.DOTALL)

ANALYSIS_FIELDS = [
    "domain", "category", "urgency", "priority", "severity", "confidence",
    "reasoning", "estimatedCost", "timeToResolve", "riskLevel",
]

RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        name: {"type": "number" if name == "confidence" else "string"}
        for name in ANALYSIS_FIELDS
    },
    "required": ANALYSIS_FIELDS,
}

FALLBACK_REASONING = (
    "Fallback analysis due to AI service unavailability. "
    "Manual review recommended for accurate assessment."
)

EMERGENCY_KEYWORDS = (
    "leak", "flood", "fire", "exposed", "emergency", "urgent",
    "danger", "broken", "burst", "immediate",
)
ROUTINE_KEYWORDS = ("minor", "cosmetic", "routine")

# first match wins
DOMAIN_RULES = [
    (("water", "leak", "pipe", "plumb"), "Plumbing", "Water System Issue"),
    (("light", "electric", "power", "outlet"), "Electrical", "Electrical System Issue"),
    (("heat", "cool", "hvac", "air"), "HVAC", "Climate Control Issue"),
    (("paint", "cosmetic", "appearance"), "General Maintenance", "Cosmetic Issue"),
    (("structure", "crack", "foundation"), "Structural", "Structural Issue"),
]


class ClassifierError(Exception):
    """Raised inside the adapter when Gemini cannot produce a valid result."""


def build_prompt(description: str) -> str:
    return f"""You are an expert facility maintenance analyst with 20+ years of experience. Analyze this maintenance issue comprehensively using BOTH the image (if provided) and description.

DESCRIPTION: "{description}"

ANALYSIS INSTRUCTIONS:
1. Examine the image carefully for visual evidence of the maintenance issue
2. Use the description to provide context, but prioritize what you can see in the image
3. Look for visual indicators of damage, wear, malfunction, or safety hazards
4. Assess the severity based on visual evidence

DOMAINS: Plumbing, Electrical, HVAC, Structural, Fire Safety, Security, IT/Technology, Landscaping, Cleaning, General Maintenance

URGENCY (Response Time):
- IMMEDIATE: 0-2 hours (life safety, major system failure)
- URGENT: 2-24 hours (significant operational impact)
- STANDARD: 1-7 days (normal maintenance)
- ROUTINE: 1-4 weeks (preventive/cosmetic)

PRIORITY (Business Impact): CRITICAL, HIGH, MEDIUM, LOW
SEVERITY (Risk Level): CRITICAL, HIGH, MEDIUM, LOW
RISK LEVEL: LOW, MEDIUM, HIGH, CRITICAL

Respond with valid JSON only:
{{
  "domain": "primary_domain",
  "category": "specific_subcategory",
  "urgency": "IMMEDIATE|URGENT|STANDARD|ROUTINE",
  "priority": "CRITICAL|HIGH|MEDIUM|LOW",
  "severity": "CRITICAL|HIGH|MEDIUM|LOW",
  "confidence": 0.95,
  "reasoning": "Detailed analysis based on visual evidence and description context",
  "estimatedCost": "$50-100",
  "timeToResolve": "2-4 hours",
  "riskLevel": "LOW|MEDIUM|HIGH|CRITICAL"
}}"""


def fallback_analysis(description: str) -> AIAnalysis:
    text = (description or "").lower()

    domain, category = "General Maintenance", "General Issue"
    for keywords, rule_domain, rule_category in DOMAIN_RULES:
        if any(k in text for k in keywords):
            domain, category = rule_domain, rule_category
            break

    if any(k in text for k in EMERGENCY_KEYWORDS):
        urgency, level, cost, eta = "URGENT", "HIGH", "$500-2000", "2-8 hours"
    elif any(k in text for k in ROUTINE_KEYWORDS):
        urgency, level, cost, eta = "ROUTINE", "LOW", "$50-200", "1-2 weeks"
    else:
        urgency, level, cost, eta = "STANDARD", "MEDIUM", "$100-500", "1-2 days"

    return AIAnalysis(
        domain=domain,
        category=category,
        urgency=urgency,
        priority=level,
        severity=level,
        confidence=0.6,
        reasoning=FALLBACK_REASONING,
        estimated_cost=cost,
        time_to_resolve=eta,
        risk_level=level,
    )


def parse_data_url(data_url: Optional[str]) -> Optional[tuple[str, bytes]]:
    """``data:<mime>;base64,<payload>`` -> (mime, bytes); anything else -> None."""
    if not data_url:
        return None
    m = DATA_URL_RE.match(data_url.strip())
    if not m:
        return None
    try:
        return m.group(1), base64.b64decode(m.group(2), validate=False)
    except (ValueError, TypeError):
        return None


def _safe_json_loads(raw_text: str) -> dict[str, Any]:
    cleaned = raw_text.strip()
    cleaned = re.sub(r"^```[a-zA-Z0-9_-]*", "", cleaned).strip()
    cleaned = re.sub(r"```$", "", cleaned).strip()
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError:
        start, end = cleaned.find("{"), cleaned.rfind("}")
        if start == -1 or end <= start:
            raise
        payload = json.loads(cleaned[start:end + 1])
    if not isinstance(payload, dict):
        raise ClassifierError("Gemini returned JSON that is not an object")
    return payload


class Classifier:
    """Adapter around the Gemini client. ``client`` may be injected (tests)."""

    def __init__(self, api_key: Optional[str] = None, model: str = "gemini-2.5-flash",
                 timeout_seconds: float = 30.0, client: Any = None):
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._client = client

    @property
    def enabled(self) -> bool:
        return bool(self._client is not None or self.api_key)

    def _get_client(self):
        if self._client is None:
            from google import genai
            from google.genai import types

            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(self.timeout_seconds * 1000)),
            )
        return self._client

    def _request(self, description: str, image: Optional[str]) -> AIAnalysis:
        from google.genai import types

        contents = []
        inline = parse_data_url(image)
        if inline:
            mime_type, data = inline
            contents.append(types.Part.from_bytes(data=data, mime_type=mime_type))
        contents.append(types.Part.from_text(text=build_prompt(description)))

        response = self._get_client().models.generate_content(
            model=self.model,
            contents=contents,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=RESPONSE_SCHEMA,
            ),
        )
        raw_text = (getattr(response, "text", None) or "").strip()
        if not raw_text:
            raise ClassifierError("Empty response from Gemini")
        return AIAnalysis.model_validate(_safe_json_loads(raw_text))

    def analyze(self, description: str, image: Optional[str] = None) -> AIAnalysis:
        if not self.enabled:
            logger.info("No Gemini API key configured, using fallback analysis")
            return fallback_analysis(description)
        try:
            return self._request(description, image)
        except (ClassifierError, SchemaError, json.JSONDecodeError) as e:
            logger.warning(f"Gemini returned an unusable analysis, falling back: {e}")
        except Exception as e:
            logger.error(f"Gemini analysis failed: {e}", exc_info=True)
        return fallback_analysis(description)
