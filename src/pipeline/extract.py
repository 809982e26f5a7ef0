"""Stage A: Extract structured resume fields from an uploaded document (LLM-assisted)."""

import json
import logging

import groq
from groq import Groq

from src.errors import ExtractionError, MalformedInputError
from src.pipeline.pdf_parser import extract_text
from src.utils import hash_text

log = logging.getLogger("resume_intake.extract")

PROMPT_VERSION = "EXTRACT_RESUME_V1"
MODEL_PARAMS = {"temperature": 0, "top_p": 1}

EXTRACTION_PROMPT = """You are a résumé parser. Extract the candidate's details from the résumé text below.
Only use facts present in the text. Use empty strings or empty arrays when a field is not present.

Output JSON with this exact schema:
{
  "candidateName": {"firstName": "string", "familyName": "string"},
  "email": ["string"],
  "phoneNumber": ["string"],
  "summary": "string",
  "totalYearsExperience": number,
  "workExperience": [
    {
      "jobTitle": "string",
      "organization": "string",
      "dates": {"startDate": "YYYY-MM-DD", "endDate": "YYYY-MM-DD or null", "isCurrent": boolean},
      "jobDescription": "string"
    }
  ],
  "education": [
    {"accreditation": {"education": "string", "educationLevel": "string"}}
  ],
  "skills": [{"name": "string"}]
}

Résumé text:
---
{resume_text}
---"""


class ResumeExtractor:
    """Turns raw upload bytes into the extraction payload consumed by normalize_candidate."""

    def __init__(self, api_key: str | None, model: str, client=None):
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self):
        if self._client is None:
            if not self.api_key:
                raise ExtractionError("GROQ_API_KEY is not set; document extraction unavailable")
            self._client = Groq(api_key=self.api_key)
        return self._client

    def extract(self, file_bytes: bytes, filename: str) -> dict:
        """
        Extract raw résumé fields.
        Raises MalformedInputError for an empty upload and ExtractionError for everything
        the document service can fail on (unreadable file, auth, quota, bad output).
        """
        if not file_bytes:
            raise MalformedInputError("Uploaded file is empty")

        resume_text = extract_text(file_bytes, filename)
        if not resume_text:
            raise ExtractionError(f"No text could be extracted from {filename!r}; the document may be scanned")

        prompt = EXTRACTION_PROMPT.replace("{resume_text}", resume_text)
        client = self._get_client()
        log.debug("Extracting %s (chars=%d, prompt_hash=%s)", filename, len(resume_text), hash_text(prompt)[:16])
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=MODEL_PARAMS["temperature"],
                top_p=MODEL_PARAMS["top_p"],
                response_format={"type": "json_object"},
            )
        except groq.APIError as e:
            raise ExtractionError(f"Document extraction request failed: {e}") from e

        content = (response.choices[0].message.content or "").strip() if response.choices else ""
        if not content:
            raise ExtractionError("Document extraction returned an empty payload")
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ExtractionError(f"Invalid JSON from extraction model: {e}") from e
        if not isinstance(data, dict):
            raise ExtractionError("Extraction payload is not a JSON object")
        return data

    __call__ = extract
