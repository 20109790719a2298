"""Tests for the /certificates endpoints."""
from datetime import date
from unittest.mock import patch

import pytest

from adcert.core.certificates import issue_certificate
from adcert.models.enums import SubmissionStatus
from tests.conftest import make_submission


@pytest.fixture
def certificate(db_session, advertiser_user):
    submission = make_submission(db_session, advertiser_user, status=SubmissionStatus.APPROVED)
    with patch("adcert.core.certificates.utc_today", return_value=date(2024, 1, 15)):
        return issue_certificate(db_session, submission.submission_id)


class TestVerify:
    """GET /certificates/verify/{number} (no authentication)"""

    def test_valid_certificate_shows_public_details(self, client, certificate):
        with patch("adcert.core.certificates.utc_today", return_value=date(2024, 3, 1)):
            response = client.get(f"/certificates/verify/{certificate.certificate_number}")
        assert response.status_code == 200
        data = response.json()
        assert data["classification"] == "VALID"
        details = data["certificate"]
        assert details["certificate_number"] == certificate.certificate_number
        assert details["campaign_title"] == "Harmattan Breakfast"
        assert details["brand_name"] == "Sunrise Foods"
        assert details["advert_category"] == "tv"
        assert details["geographic_scope"] == "national"
        assert details["advertiser_name"] == "Ada Okafor"
        assert details["company_name"] == "Sunrise Foods Ltd"
        assert details["valid_from"] == "2024-01-15"
        assert details["valid_until"] == "2025-01-14"
        # Internal identifiers are not disclosed
        assert "submission_id" not in details
        assert "qr_code_data" not in details

    def test_expired_certificate(self, client, certificate):
        with patch("adcert.core.certificates.utc_today", return_value=date(2025, 2, 1)):
            response = client.get(f"/certificates/verify/{certificate.certificate_number}")
        data = response.json()
        assert data["classification"] == "EXPIRED"
        assert data["certificate"]["valid_until"] == "2025-01-14"

    def test_unknown_number(self, client, db_session):
        response = client.get("/certificates/verify/ARCON-2024-000000")
        assert response.status_code == 200
        assert response.json() == {"classification": "INVALID", "certificate": None}

    def test_revoked_certificate_is_invalid(self, client, db_session, certificate):
        certificate.is_active = False
        db_session.commit()

        with patch("adcert.core.certificates.utc_today", return_value=date(2024, 3, 1)):
            response = client.get(f"/certificates/verify/{certificate.certificate_number}")
        assert response.json() == {"classification": "INVALID", "certificate": None}

    def test_repeated_calls_agree(self, client, certificate):
        with patch("adcert.core.certificates.utc_today", return_value=date(2024, 3, 1)):
            first = client.get(f"/certificates/verify/{certificate.certificate_number}").json()
            second = client.get(f"/certificates/verify/{certificate.certificate_number}").json()
        assert first == second


class TestRevoke:
    """POST /certificates/{number}/revoke"""

    def test_admin_revokes(self, client, certificate, admin_headers, admin_user):
        response = client.post(
            f"/certificates/{certificate.certificate_number}/revoke",
            headers=admin_headers,
            json={"reason": "Campaign withdrawn"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["is_active"] is False
        assert data["revocation_reason"] == "Campaign withdrawn"

        verify = client.get(f"/certificates/verify/{certificate.certificate_number}").json()
        assert verify["classification"] == "INVALID"

    def test_reviewer_forbidden(self, client, certificate, reviewer_headers):
        response = client.post(
            f"/certificates/{certificate.certificate_number}/revoke",
            headers=reviewer_headers,
            json={}
        )
        assert response.status_code == 403
        assert response.json()["error"] == "Unauthorized"

    def test_anonymous_rejected(self, client, certificate):
        response = client.post(f"/certificates/{certificate.certificate_number}/revoke", json={})
        assert response.status_code == 401

    def test_unknown_number(self, client, db_session, admin_headers):
        response = client.post("/certificates/ARCON-2024-000000/revoke", headers=admin_headers, json={})
        assert response.status_code == 404
