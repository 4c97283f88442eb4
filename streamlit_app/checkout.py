"""Streamlit checkout page with the event delivery schedule selector."""

import streamlit as st

from app.core.config import settings
from app.schemas.order import EventOrderCreate
from app.services.daily_capacity import DailyCapacityReachedError, capacity_message, list_bookable_dates
from app.services.delivery_scheduling import (
    ConfigurationError,
    calculate_delivery_schedule,
    format_delivery_date,
    get_delivery_message,
)
from app.services.event_service import EventNotActiveError, list_active_events, to_shop_event
from app.services.order_service import (
    DeliveryDateRejectedError,
    ShopClosedError,
    TimeSlotRejectedError,
    place_event_order,
)
from app.utils.time import business_now
from streamlit_app.common import get_session, now_string

st.set_page_config(page_title="Event checkout", layout="centered")
st.title("Event shop checkout")

with get_session() as db:
    events = list_active_events(db)
    if not events:
        st.warning("No event shop is open right now.")
        st.stop()

    event_map = {event.name: event for event in events}
    event = event_map[st.selectbox("Event", list(event_map.keys()))]

    try:
        config = to_shop_event(event)
    except ConfigurationError:
        st.error("This event's delivery settings are misconfigured. Please contact the organizers.")
        st.stop()

    @st.fragment(run_every=settings.schedule_refresh_seconds)
    def schedule_banner() -> None:
        # Rerun on a timer so the message flips as soon as the cutoff passes.
        schedule = calculate_delivery_schedule(config, business_now())
        if not schedule.can_order:
            st.error(schedule.reason)
            return
        st.info(get_delivery_message(schedule))
        if schedule.is_past_cutoff and schedule.cutoff_time:
            st.caption(f"Orders placed before {schedule.cutoff_time} will be delivered sooner.")
        st.caption(f"Updated {now_string()}")

    schedule_banner()

    now = business_now()
    schedule = calculate_delivery_schedule(config, now)
    if not schedule.can_order:
        st.stop()

    customer_name = st.text_input("Name")
    contact_number = st.text_input("Mobile number (09XX XXX XXXX)")

    delivery_date = None
    time_slot = None
    if config.allow_scheduled_delivery:
        date_labels = {}
        for day, remaining in list_bookable_dates(db, event, config, settings.delivery_options_days_ahead, now):
            suffix = "" if remaining is None else f" ({remaining} left)"
            date_labels[f"{format_delivery_date(day)}{suffix}"] = day
        if not date_labels:
            st.warning("No delivery dates are available this week.")
            st.stop()
        delivery_date = date_labels[st.selectbox("Delivery date", list(date_labels.keys()))]
        time_slot = st.selectbox("Delivery time", schedule.available_time_slots)
        st.success(f"Delivery scheduled for: {format_delivery_date(delivery_date)} - {time_slot}")

    notes = st.text_area("Delivery notes (optional)")

    if st.button("Place order"):
        try:
            payload = EventOrderCreate(
                customer_name=customer_name,
                contact_number=contact_number,
                delivery_date=delivery_date,
                delivery_time_slot=time_slot,
                delivery_notes=notes or None,
            )
        except ValueError as exc:
            st.error(str(exc))
            st.stop()

        try:
            order = place_event_order(db, event, payload, business_now())
        except EventNotActiveError:
            st.error("Event is not currently active")
        except (ShopClosedError, DeliveryDateRejectedError, TimeSlotRejectedError) as exc:
            st.error(str(exc))
        except DailyCapacityReachedError as exc:
            st.error(capacity_message(exc))
        else:
            st.success(f"Order #{order.id} placed for {format_delivery_date(order.delivery_date)}.")
