"""Pydantic schemas for `User` summaries embedded in messages."""

from typing import Optional

from pydantic import ConfigDict

from app.schemas.common import CamelModel


class UserSummary(CamelModel):
	id: int
	username: str
	email: Optional[str] = None
	first_name: Optional[str] = None
	last_name: Optional[str] = None

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"id": 7,
			"username": "jsmith",
			"email": "jsmith@example.com",
			"firstName": "Jane",
			"lastName": "Smith",
		}
	})
