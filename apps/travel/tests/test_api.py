import pytest
from decimal import Decimal
from datetime import timedelta
from uuid import uuid4
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.travel.models import Attendance, AttendanceRequest, RequestStatus, RiderSettings


# =============================================================================
# Settings Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestSettingsEndpoint:
    """Tests for GET|PUT /api/travel/settings/"""

    def test_rider_sets_cost(self, rider_client, rider):
        url = reverse('travel:settings')
        response = rider_client.put(url, {'daily_petrol_cost': '120.00'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['daily_petrol_cost']) == Decimal('120.00')
        assert RiderSettings.objects.get(rider=rider).daily_petrol_cost == Decimal('120.00')

    def test_cost_out_of_range(self, rider_client, rider):
        url = reverse('travel:settings')
        response = rider_client.put(url, {'daily_petrol_cost': '10000.01'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not RiderSettings.objects.filter(rider=rider).exists()

    def test_limit_follows_setting(self, rider_client, rider, settings):
        settings.DAILY_COST_MAX = Decimal('500.00')
        url = reverse('travel:settings')

        rejected = rider_client.put(url, {'daily_petrol_cost': '500.01'}, format='json')
        accepted = rider_client.put(url, {'daily_petrol_cost': '500.00'}, format='json')

        assert rejected.status_code == status.HTTP_400_BAD_REQUEST
        assert 'daily_petrol_cost' in rejected.data
        assert accepted.status_code == status.HTTP_200_OK

    def test_negative_cost(self, rider_client):
        url = reverse('travel:settings')
        response = rider_client.put(url, {'daily_petrol_cost': '-5'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_partner_cannot_set_cost(self, partner_client, paired_partner):
        url = reverse('travel:settings')
        response = partner_client.put(url, {'daily_petrol_cost': '10.00'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_rider_reads_own(self, rider_client, rider_settings):
        response = rider_client.get(reverse('travel:settings'))

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['daily_petrol_cost']) == Decimal('120.00')

    def test_paired_partner_reads_rider_cost(self, partner_client, paired_partner, rider_settings):
        response = partner_client.get(reverse('travel:settings'))

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['daily_petrol_cost']) == Decimal('120.00')

    def test_not_configured(self, rider_client):
        response = rider_client.get(reverse('travel:settings'))

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Attendance Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestAttendanceEndpoints:
    """Tests for POST /api/travel/attendance/mark/ and GET /api/travel/attendance/"""

    def test_mark_attendance(self, partner_client, paired_partner, rider, rider_settings):
        response = partner_client.post(reverse('travel:mark-attendance'))

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['amount']) == Decimal('120.00')
        assert response.data['status'] == 'present'
        assert response.data['rider_id'] == str(rider.id)

    def test_mark_twice_keeps_one_row(self, partner_client, paired_partner, rider_settings):
        url = reverse('travel:mark-attendance')
        partner_client.post(url)
        response = partner_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert Attendance.objects.count() == 1

    def test_mark_without_settings(self, partner_client, paired_partner):
        response = partner_client.post(reverse('travel:mark-attendance'))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert not Attendance.objects.exists()

    def test_mark_unpaired(self, partner_client, rider_settings):
        response = partner_client.post(reverse('travel:mark-attendance'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_rider_cannot_mark(self, rider_client, rider_settings):
        response = rider_client.post(reverse('travel:mark-attendance'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_attendance(self, partner_client, rider_client, paired_partner, rider_settings):
        partner_client.post(reverse('travel:mark-attendance'))

        response = rider_client.get(reverse('travel:attendance-list'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['partner_id'] == str(paired_partner.id)

    def test_list_invalid_range(self, rider_client):
        today = timezone.localdate()
        response = rider_client.get(reverse('travel:attendance-list'), {
            'start_date': today.isoformat(),
            'end_date': (today - timedelta(days=1)).isoformat(),
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Request Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestRequestEndpoints:
    """Tests for /api/travel/requests/"""

    def test_send_request(self, rider_client, paired_partner):
        url = reverse('travel:requests')
        response = rider_client.post(url, {'partner_id': str(paired_partner.id)}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'pending'
        assert AttendanceRequest.objects.count() == 1

    def test_send_to_unpaired_partner(self, rider_client, partner):
        url = reverse('travel:requests')
        response = rider_client.post(url, {'partner_id': str(partner.id)}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_partner_cannot_send(self, partner_client, paired_partner, rider):
        url = reverse('travel:requests')
        response = partner_client.post(url, {'partner_id': str(rider.id)}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_partner_lists_pending(self, rider_client, partner_client, paired_partner):
        rider_client.post(reverse('travel:requests'), {'partner_id': str(paired_partner.id)}, format='json')

        response = partner_client.get(reverse('travel:requests'), {'status': 'pending'})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1

    def test_invalid_status_filter(self, rider_client):
        response = rider_client.get(reverse('travel:requests'), {'status': 'done'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_mark_completes_request(self, rider_client, partner_client, paired_partner, rider_settings):
        rider_client.post(reverse('travel:requests'), {'partner_id': str(paired_partner.id)}, format='json')
        partner_client.post(reverse('travel:mark-attendance'))

        assert AttendanceRequest.objects.get().status == RequestStatus.COMPLETED

    def test_ignore_request(self, rider_client, partner_client, paired_partner):
        created = rider_client.post(
            reverse('travel:requests'), {'partner_id': str(paired_partner.id)}, format='json'
        )
        url = reverse('travel:ignore-request', args=[created.data['id']])

        response = partner_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'ignored'

    def test_ignore_twice(self, rider_client, partner_client, paired_partner):
        created = rider_client.post(
            reverse('travel:requests'), {'partner_id': str(paired_partner.id)}, format='json'
        )
        url = reverse('travel:ignore-request', args=[created.data['id']])
        partner_client.post(url)

        response = partner_client.post(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_ignore_by_stranger(self, rider_client, paired_partner, other_partner):
        from apps.conftest import client_for

        created = rider_client.post(
            reverse('travel:requests'), {'partner_id': str(paired_partner.id)}, format='json'
        )
        url = reverse('travel:ignore-request', args=[created.data['id']])

        response = client_for(other_partner).post(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_request_detail(self, rider_client, partner_client, paired_partner):
        created = rider_client.post(
            reverse('travel:requests'), {'partner_id': str(paired_partner.id)}, format='json'
        )
        url = reverse('travel:request-detail', args=[created.data['id']])

        response = partner_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == created.data['id']
        assert response.data['status'] == 'pending'

    def test_request_detail_unknown(self, rider_client):
        url = reverse('travel:request-detail', args=[uuid4()])

        response = rider_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_request_detail_by_stranger(self, rider_client, paired_partner, other_rider):
        from apps.conftest import client_for

        created = rider_client.post(
            reverse('travel:requests'), {'partner_id': str(paired_partner.id)}, format='json'
        )
        url = reverse('travel:request-detail', args=[created.data['id']])

        response = client_for(other_rider).get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
