"""Pytest fixtures and configuration."""

import pytest


SAMPLE_SCHEMA = """
Table affiliate {
  affiliateId string [not null, unique]
  code string [not null, unique]
  name string [not null]
  createdAt string [not null]
  updatedAt string

  Note: 'Stores affiliates available for user registration'
}

Table user {
  userId string [not null, unique]
  memberId string [not null, note: "DMS member ID"]

  Note: 'Simple user entity'
}

Table membership {
  userId string [not null, ref: <> user.userId]
  affiliateCode string [not null, ref: <> affiliate.code]
  isActive bool [not null, default: true]

  Note: 'Stores link between users and affiliates'
}
"""


@pytest.fixture
def sample_schema() -> str:
    """Three-table schema exercising constraints, references and notes."""
    return SAMPLE_SCHEMA
