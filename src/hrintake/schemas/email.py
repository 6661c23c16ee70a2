"""Inbound email and classification result schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Attachment(BaseModel):
    """File attached to an inbound application email."""

    filename: str = ""
    content_type: str | None = None
    content: bytes | None = None
    url: str | None = None

    model_config = ConfigDict(
        extra="forbid",
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )


class InboundEmail(BaseModel):
    """Raw email delivered by the upstream mail relay."""

    subject: str = ""
    from_: str = Field(default="", alias="from")
    body: str = ""
    attachments: list[Attachment] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class ClassificationResult(BaseModel):
    """Outcome of classifying an inbound email.

    Unmatched results carry empty job/company identifiers but always keep the
    candidate identity so an email is never silently dropped.
    """

    job_posting_id: str = ""
    company_id: str = ""
    candidate_email: str
    candidate_name: str
    attachments: list[Attachment] = Field(default_factory=list)
    matched: bool = False

    model_config = ConfigDict(extra="forbid")

    def summary(self) -> dict[str, object]:
        """Return a JSON-friendly view without attachment payloads."""
        data = self.model_dump(mode="json", exclude={"attachments"})
        data["attachments"] = [attachment.filename for attachment in self.attachments]
        return data
