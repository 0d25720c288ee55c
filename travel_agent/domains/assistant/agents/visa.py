"""
Travel Agent - Visa Agent
Visa requirements by nationality, destination, and purpose of travel.

Known routes are answered from a seeded table. Other routes go to the
LLM when one is configured, and otherwise get a generic checklist that
asks the traveller to verify with the embassy.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from travel_agent.domains.assistant.agents.base import BaseAgent
from travel_agent.domains.assistant.capabilities import AgentCapabilities
from travel_agent.domains.assistant.llm import parse_json_content
from travel_agent.domains.assistant.schemas import (
    ChecklistItem,
    FeeInfo,
    FormInfo,
    VisaRequirement,
)

logger = logging.getLogger(__name__)

VISA_SYSTEM_PROMPT = "You are a visa requirements expert. Return ONLY valid JSON."

VISA_USER_PROMPT = """You are VisaDoc Agent, an expert in international visa requirements.
Provide official-like but non-legal guidance.

User Query:
- Nationality: {nationality}
- Destination: {destination}
- Stay Duration: {stay_days} days
- Purpose: {purpose}

Return ONLY valid JSON with this exact structure:
{{
  "visa_required": boolean,
  "visa_type": "string or empty",
  "checklist": [{{"item":"string", "notes":"string"}}],
  "forms": [{{"name":"string", "download_url":"string"}}],
  "processing_time": "string",
  "fees": {{"amount": number, "currency": "string"}},
  "validity": "string",
  "max_stay_days": number,
  "disclaimer": "This is not legal advice. Please verify with official government sources."
}}

Provide accurate information. If uncertain, set visa_required to true and suggest manual verification."""


# ============ Seed Data ============


SEED_REQUIREMENTS: dict[str, VisaRequirement] = {
    "TH_CA_tourism": VisaRequirement(
        visa_required=True,
        visa_type="Temporary Resident Visa (TRV)",
        checklist=[
            ChecklistItem(item="Valid passport", notes="Valid for at least 6 months beyond stay"),
            ChecklistItem(item="Completed application form", notes="IMM 5257 or IMM 5257E"),
            ChecklistItem(item="Passport photos", notes="2 recent photos (35mm x 45mm)"),
            ChecklistItem(item="Proof of financial support", notes="Bank statements for last 6 months"),
            ChecklistItem(item="Travel itinerary", notes="Flight bookings and accommodation"),
            ChecklistItem(item="Employment letter", notes="From current employer (if employed)"),
            ChecklistItem(item="Invitation letter", notes="If visiting family/friends"),
        ],
        forms=[
            FormInfo(
                name="IMM 5257 - Application for Visitor Visa",
                download_url="https://www.canada.ca/en/immigration-refugees-citizenship/services/application/application-forms-guides/imm5257e.html",
            ),
            FormInfo(
                name="IMM 5645 - Family Information",
                download_url="https://www.canada.ca/en/immigration-refugees-citizenship/services/application/application-forms-guides/imm5645e.html",
            ),
        ],
        processing_time="14-21 days",
        fees=FeeInfo(amount=100, currency="CAD"),
        validity="Up to 10 years (multiple entry)",
        max_stay_days=180,
        disclaimer="This is not legal advice. Please verify with official Canadian government sources at canada.ca",
    ),
    "TH_JP_tourism": VisaRequirement(
        visa_required=False,
        visa_type="Visa Exemption",
        checklist=[
            ChecklistItem(item="Valid passport", notes="Valid for duration of stay"),
            ChecklistItem(item="Return ticket", notes="Proof of onward travel"),
            ChecklistItem(item="Proof of accommodation", notes="Hotel bookings or invitation letter"),
            ChecklistItem(item="Sufficient funds", notes="Approximately 100,000 JPY or equivalent"),
        ],
        processing_time="Not applicable",
        validity="15 days per entry",
        max_stay_days=15,
        disclaimer="This is not legal advice. Visa exemption allows 15-day stay for Thai passport holders. Please verify with Japanese embassy.",
    ),
    "TH_US_tourism": VisaRequirement(
        visa_required=True,
        visa_type="B-2 Tourist Visa",
        checklist=[
            ChecklistItem(item="Valid passport", notes="Valid for at least 6 months beyond stay"),
            ChecklistItem(item="DS-160 form", notes="Online nonimmigrant visa application"),
            ChecklistItem(item="Passport photo", notes="Recent 2x2 inch photo"),
            ChecklistItem(item="Interview appointment", notes="Schedule at US Embassy Bangkok"),
            ChecklistItem(item="Proof of ties to Thailand", notes="Employment letter, property ownership, family ties"),
            ChecklistItem(item="Financial documents", notes="Bank statements, income tax returns"),
            ChecklistItem(item="Travel itinerary", notes="Detailed travel plans"),
        ],
        forms=[
            FormInfo(
                name="DS-160 - Online Nonimmigrant Visa Application",
                download_url="https://ceac.state.gov/genniv/",
            ),
        ],
        processing_time="3-5 weeks after interview",
        fees=FeeInfo(amount=185, currency="USD"),
        validity="Up to 10 years (multiple entry)",
        max_stay_days=180,
        disclaimer="This is not legal advice. Please verify with the US Embassy in Bangkok at th.usembassy.gov",
    ),
    "TH_GB_tourism": VisaRequirement(
        visa_required=True,
        visa_type="Standard Visitor Visa",
        checklist=[
            ChecklistItem(item="Valid passport", notes="Valid for at least 6 months"),
            ChecklistItem(item="Online application form", notes="Complete on gov.uk"),
            ChecklistItem(item="Passport photos", notes="Color photo 45mm x 35mm"),
            ChecklistItem(item="Financial evidence", notes="Bank statements for last 6 months"),
            ChecklistItem(item="Employment documents", notes="Letter from employer, payslips"),
            ChecklistItem(item="Accommodation proof", notes="Hotel bookings or invitation letter"),
            ChecklistItem(item="Travel itinerary", notes="Flight bookings"),
            ChecklistItem(item="Tuberculosis test", notes="From approved clinic if staying >6 months"),
        ],
        forms=[
            FormInfo(
                name="Online Visa Application",
                download_url="https://www.gov.uk/standard-visitor-visa",
            ),
        ],
        processing_time="15-21 working days",
        fees=FeeInfo(amount=115, currency="GBP"),
        validity="6 months",
        max_stay_days=180,
        disclaimer="This is not legal advice. Please verify with UK Visas and Immigration at gov.uk",
    ),
    "US_TH_tourism": VisaRequirement(
        visa_required=False,
        visa_type="Visa Exemption",
        checklist=[
            ChecklistItem(item="Valid US passport", notes="Valid for at least 6 months"),
            ChecklistItem(item="Return ticket", notes="Proof of onward travel within 30 days"),
            ChecklistItem(item="Proof of accommodation", notes="Hotel booking or invitation letter"),
        ],
        processing_time="Not applicable",
        validity="30 days per entry",
        max_stay_days=30,
        disclaimer="This is not legal advice. US passport holders can stay visa-free for 30 days. Please verify with Thai embassy.",
    ),
}


def visa_key(nationality: str, destination: str, purpose: str) -> str:
    return f"{nationality.strip().upper()}_{destination.strip().upper()}_{purpose.strip().lower()}"


class VisaAgent(BaseAgent):
    """Visa requirement lookup."""

    name = "VisaAgent"

    def __init__(self, capabilities: AgentCapabilities | None = None) -> None:
        super().__init__(capabilities)
        self._known: dict[str, VisaRequirement] = dict(SEED_REQUIREMENTS)
        logger.debug(f"VisaAgent: initialized with {len(self._known)} entries")

    async def check_visa(
        self,
        nationality: str,
        destination: str,
        stay_days: int,
        purpose: str = "tourism",
    ) -> VisaRequirement:
        """Requirements for one route. Never raises for unknown routes."""
        logger.info(
            f"VisaAgent: checking {nationality} -> {destination}, "
            f"{stay_days} days, purpose: {purpose}"
        )
        key = visa_key(nationality, destination, purpose)

        known = self._known.get(key)
        if known is not None:
            logger.info(f"VisaAgent: found {key} in seeded requirements")
            return known.model_copy(deep=True)

        requirement = await self._query_llm(nationality, destination, stay_days, purpose)
        if requirement is None:
            return self._fallback_requirement(destination)

        self._known[key] = requirement
        return requirement.model_copy(deep=True)

    async def _query_llm(
        self, nationality: str, destination: str, stay_days: int, purpose: str
    ) -> VisaRequirement | None:
        content = await self._complete(
            VISA_SYSTEM_PROMPT,
            VISA_USER_PROMPT.format(
                nationality=nationality,
                destination=destination,
                stay_days=stay_days,
                purpose=purpose,
            ),
            temperature=0.3,
            max_tokens=1000,
        )
        if content is None:
            return None
        try:
            return VisaRequirement.model_validate(parse_json_content(content))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"VisaAgent: failed to parse LLM response: {e}")
            return None

    def _fallback_requirement(self, destination: str) -> VisaRequirement:
        return VisaRequirement(
            visa_required=True,
            visa_type="Unknown - Manual Verification Required",
            checklist=[
                ChecklistItem(
                    item="Valid passport",
                    notes="Must be valid for at least 6 months beyond travel dates",
                ),
                ChecklistItem(item="Passport photos", notes="Recent passport-sized photographs"),
                ChecklistItem(item="Proof of travel", notes="Flight tickets or itinerary"),
            ],
            processing_time="Unknown",
            disclaimer=(
                "⚠️ Visa requirements could not be verified from our database. "
                f"Please contact the embassy or consulate of {destination} for "
                "accurate information. This is not legal advice."
            ),
        )
