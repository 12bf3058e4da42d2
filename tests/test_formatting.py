import pytest

from bookdesk.core.exceptions import InvalidBookingInput
from bookdesk.domain.formatting import (
    VEHICLE_PLACEHOLDER,
    format_booking_for_display,
    get_default_booking_form,
    prepare_booking_for_api,
    prepare_booking_for_form,
)
from bookdesk.domain.pricing import calculate_total_price


class TestDisplay:
    def test_formats_date_and_time(self, booking):
        display = format_booking_for_display(booking)
        assert display["formatted_date"] == "Saturday, October 17, 2026"
        assert display["formatted_time"] == "02:30 PM"

    def test_morning_time_with_seconds(self, booking):
        display = format_booking_for_display({**booking, "scheduled_time": "09:05:00"})
        assert display["formatted_time"] == "09:05 AM"

    def test_recomputes_total_price(self, booking):
        display = format_booking_for_display({**booking, "total_price": 1.0})
        assert display["total_price"] == 120

    def test_status_info(self, booking):
        display = format_booking_for_display({**booking, "status": "in_progress"})
        assert display["status_info"]["label"] == "In Progress"
        assert display["status_info"]["description"] == "Service currently being performed"
        assert "bg-orange-100" in display["status_info"]["color"]

    def test_unknown_status_shows_as_pending(self, booking):
        display = format_booking_for_display({**booking, "status": "archived"})
        assert display["status_info"]["label"] == "Pending"

    def test_vehicle_info(self, booking):
        assert format_booking_for_display(booking)["vehicle_info"] == "2021 Toyota RAV4"
        partial = {**booking, "vehicle_model": "", "vehicle_make": None}
        assert format_booking_for_display(partial)["vehicle_info"] == "2021"

    def test_vehicle_placeholder(self, booking):
        bare = {**booking, "vehicle_year": None, "vehicle_make": "", "vehicle_model": None}
        assert format_booking_for_display(bare)["vehicle_info"] == VEHICLE_PLACEHOLDER

    def test_missing_schedule_formats_empty(self, booking):
        display = format_booking_for_display({**booking, "scheduled_date": None, "scheduled_time": ""})
        assert display["formatted_date"] == ""
        assert display["formatted_time"] == ""

    def test_keeps_original_fields_without_mutating(self, booking):
        original = dict(booking)
        display = format_booking_for_display(booking)
        assert display["booking_number"] == "BK12345678XYZ"
        assert booking == original

    @pytest.mark.parametrize(
        "overrides",
        [{"scheduled_date": "17/10/2026"}, {"scheduled_time": "half past two"}, {"base_price": None}],
    )
    def test_corrupt_record_fails_fast(self, booking, overrides):
        with pytest.raises(InvalidBookingInput):
            format_booking_for_display({**booking, **overrides})

    def test_non_mapping_is_rejected(self):
        with pytest.raises(InvalidBookingInput):
            format_booking_for_display(None)


class TestDefaultForm:
    def test_blank_form(self):
        form = get_default_booking_form()
        assert form["status"] == "pending"
        assert form["estimated_duration"] == 60
        assert form["base_price"] == 0
        assert form["customer_id"] == ""
        assert None not in form.values()

    def test_customer_profile_prefills_customer(self):
        form = get_default_booking_form({"id": "customer-1", "role": "customer"})
        assert form["customer_id"] == "customer-1"
        assert form["worker_id"] == ""

    def test_worker_profile_prefills_worker(self):
        form = get_default_booking_form({"id": "worker-1", "role": "worker"})
        assert form["worker_id"] == "worker-1"
        assert form["customer_id"] == ""

    def test_admin_profile_prefills_nothing(self):
        assert get_default_booking_form({"id": "admin-1", "role": "admin"}) == get_default_booking_form()


class TestApiPayload:
    def test_coerces_types(self):
        payload = prepare_booking_for_api({
            "customer_id": "customer-1",
            "worker_id": "",
            "estimated_duration": "90",
            "vehicle_year": "2019",
            "vehicle_type": "van",
            "base_price": "50.5",
            "additional_charges": "4.5",
            "discount_amount": "",
            "special_instructions": None,
        })
        assert payload["customer_id"] == "customer-1"
        assert payload["worker_id"] is None
        assert payload["special_instructions"] is None
        assert payload["estimated_duration"] == 90
        assert payload["vehicle_year"] == 2019
        assert payload["base_price"] == 50.5
        assert payload["additional_charges"] == 4.5
        assert payload["discount_amount"] == 0.0
        assert payload["total_price"] == 75.2

    def test_unparseable_integers_become_null(self):
        payload = prepare_booking_for_api({"base_price": 10, "vehicle_year": "new", "estimated_duration": "45.9"})
        assert payload["vehicle_year"] is None
        assert payload["estimated_duration"] == 45

    def test_adjustments_default_to_zero_when_absent(self):
        payload = prepare_booking_for_api({"base_price": 10, "vehicle_type": "sedan"})
        assert payload["additional_charges"] == 0.0
        assert payload["discount_amount"] == 0.0
        assert payload["total_price"] == 10.0

    def test_submitted_total_is_ignored(self):
        payload = prepare_booking_for_api({"base_price": 100, "vehicle_type": "truck", "total_price": 1})
        assert payload["total_price"] == 160.0

    def test_oversized_count_becomes_null(self):
        payload = prepare_booking_for_api({"base_price": 10, "estimated_duration": "9e99999999"})
        assert payload["estimated_duration"] is None
        assert payload["total_price"] == 10.0

    @pytest.mark.parametrize("field_name", ["base_price", "additional_charges", "discount_amount"])
    def test_oversized_amount_is_rejected(self, field_name):
        form = {"base_price": 10, "vehicle_type": "suv", field_name: "1e30"}
        with pytest.raises(InvalidBookingInput, match="cannot exceed"):
            prepare_booking_for_api(form)

    @pytest.mark.parametrize("base_price", ["", None, "a lot"])
    def test_missing_base_price_is_not_priced_as_zero(self, base_price):
        with pytest.raises(InvalidBookingInput):
            prepare_booking_for_api({"base_price": base_price, "vehicle_type": "sedan"})


class TestFormModel:
    def test_nulls_become_empty_strings(self, booking):
        form = prepare_booking_for_form(booking)
        assert form["special_instructions"] == ""
        assert form["base_price"] == 100.0
        assert form["can_cancel"] is True

    def test_missing_record_gives_default_form(self):
        assert prepare_booking_for_form(None) == get_default_booking_form()

    def test_non_mapping_is_rejected(self):
        with pytest.raises(InvalidBookingInput):
            prepare_booking_for_form("booking")


def test_round_trip_keeps_values_and_total(booking):
    record = {**booking, "additional_charges": 12.5, "discount_amount": None, "worker_notes": None}

    result = prepare_booking_for_form(prepare_booking_for_api(prepare_booking_for_form(record)))

    for key, value in record.items():
        if value is not None and key != "total_price":
            assert result[key] == value, key
    expected = calculate_total_price(
        record["base_price"], record["vehicle_type"], record["additional_charges"], record["discount_amount"]
    )
    assert result["total_price"] == float(expected) == 132.5
    assert result["discount_amount"] == 0.0
    assert result["worker_notes"] == ""
