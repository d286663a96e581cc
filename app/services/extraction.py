"""
OpenAI field extraction — pre-fill RFP and candidate forms from pasted text.
"""
import json
import logging
from typing import Any, Dict

from app.config import NOT_SPECIFIED, OPENAI_MODEL
from app.errors import ExtractionError
from app.extensions import openai_client as client
from app.services.dates import is_valid_date

logger = logging.getLogger('services.extraction')


RFP_PROMPT = """Tu es un assistant spécialisé dans l'analyse d'appels d'offres (AO) pour des missions de consulting IT.
Extrais les informations suivantes :
- client : le nom de l'entreprise qui émet l'AO
- mission : l'intitulé de la mission
- location : la localisation
- maxRate : le TJM maximum en nombre (sans symbole €), sinon null
- startDate : la date qui suit exactement "Début souhaité", au format JJ/MM/AAAA
- createdAt : la date qui suit exactement "Créé le" (souvent sur la ligne suivante), au format JJ/MM/AAAA

Règles : ne reformate jamais les dates, n'invente aucune date, renvoie null pour
toute information absente.

Réponds en JSON :
{"client": "...", "mission": "...", "location": "...", "maxRate": null, "startDate": "06/01/2025", "createdAt": "21/12/2024"}"""

CANDIDATE_PROMPT = """Tu analyses le profil d'un candidat (CV ou message) pour une ESN.
Extrais les informations suivantes, null si absentes :
- availability : disponibilité (texte libre, ex. "Immédiate", "1 mois")
- dailyRate : TJM souhaité en nombre
- salaryExpectations : prétentions salariales annuelles en nombre
- residence : ville de résidence
- mobility : mobilité géographique
- phone : numéro de téléphone
- email : adresse email

Réponds en JSON :
{"availability": null, "dailyRate": null, "salaryExpectations": null, "residence": null, "mobility": null, "phone": null, "email": null}"""


def _extract(system_prompt: str, content: str) -> Dict[str, Any]:
    if not client:
        raise ExtractionError("OpenAI is not configured (OPENAI_API_KEY missing)")
    if not content or not content.strip():
        raise ExtractionError("Nothing to analyze")

    try:
        response = client.chat.completions.create(
            model=OPENAI_MODEL,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": content},
            ],
            temperature=0.1,
            response_format={"type": "json_object"},
        )
    except Exception as e:
        logger.error("OpenAI API error: %s", e)
        raise ExtractionError() from e

    raw = response.choices[0].message.content or ''
    try:
        result = json.loads(raw)
    except ValueError as e:
        logger.error("JSON parse error on extraction reply: %s", raw[:500])
        raise ExtractionError("Could not parse the analysis reply") from e
    if not isinstance(result, dict):
        logger.error("Extraction reply is not a JSON object: %s", raw[:500])
        raise ExtractionError("Could not parse the analysis reply")
    return result


def _as_int(value):
    try:
        return int(value) if value not in (None, '') else None
    except (TypeError, ValueError):
        return None


def _as_date_text(value):
    return value if isinstance(value, str) and is_valid_date(value) else None


def analyze_rfp(content: str) -> Dict[str, Any]:
    """Client / mission / location / rate / dates from raw RFP text."""
    result = _extract(RFP_PROMPT, content)
    return {
        'client': result.get('client') or NOT_SPECIFIED,
        'mission': result.get('mission') or NOT_SPECIFIED,
        'location': result.get('location') or NOT_SPECIFIED,
        'maxRate': _as_int(result.get('maxRate')),
        'startDate': _as_date_text(result.get('startDate')),
        'createdAt': _as_date_text(result.get('createdAt')),
    }


def analyze_candidate(content: str) -> Dict[str, Any]:
    """Availability / rates / contact details from a candidate profile."""
    result = _extract(CANDIDATE_PROMPT, content)
    extracted = {
        key: result.get(key) or None
        for key in ('availability', 'residence', 'mobility', 'phone', 'email')
    }
    extracted['dailyRate'] = _as_int(result.get('dailyRate'))
    extracted['salaryExpectations'] = _as_int(result.get('salaryExpectations'))
    return extracted
