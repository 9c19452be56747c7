import os
import sys
from datetime import datetime, time

import requests
import streamlit as st
from dateutil.parser import isoparse

st.set_page_config(page_title="Local Vibe", layout="wide")
st.title("Local Vibe")

# Add backend to path
sys.path.append(os.path.join(os.path.dirname(__file__), "..", "backend"))
from data.locations import AVAILABLE_GENRES, DEFAULT_LOCATION, LOCATION_ADDRESSES
from models.chat_state import ChatMessage

API_URL = os.getenv("API_URL", "http://backend:8000")

PRICE_OPTIONS = {"all": "Any price", "free": "Free", "paid": "Paid"}
DATE_OPTIONS = {
    "all": "Any time",
    "today": "Today",
    "this_week": "This week",
    "next_week": "Next week",
    "this_weekend": "This weekend",
}

# --- session defaults ---
st.session_state.setdefault("token", None)
st.session_state.setdefault("user", None)
st.session_state.setdefault("location", dict(DEFAULT_LOCATION, is_using_device_location=False))
st.session_state.setdefault("suggested_ids", [])
st.session_state.setdefault(
    "messages",
    [ChatMessage(role="model", content="Hi! I'm your AI Event Assistant. Ask me anything about finding events!")],
)


def api(method: str, path: str, **kwargs):
    headers = kwargs.pop("headers", {})
    if st.session_state.token:
        headers["Authorization"] = f"Bearer {st.session_state.token}"
    return requests.request(method, f"{API_URL}{path}", headers=headers, timeout=30, **kwargs)


# --- sidebar: account ---
with st.sidebar:
    st.header("Account")
    if st.session_state.user:
        st.write(f"Signed in as **{st.session_state.user['display_name']}**")
        if st.button("Logout"):
            st.session_state.token = None
            st.session_state.user = None
            st.rerun()
    else:
        mode = st.radio("Account", ["Login", "Register"], horizontal=True, label_visibility="collapsed")
        with st.form("auth_form"):
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            display_name = st.text_input("Display name (optional)") if mode == "Register" else None
            if st.form_submit_button(mode):
                payload = {"email": email, "password": password}
                if display_name:
                    payload["display_name"] = display_name
                try:
                    res = api("POST", "/login" if mode == "Login" else "/register", json=payload)
                    if res.ok:
                        data = res.json()
                        st.session_state.token = data["access_token"]
                        st.session_state.user = data
                        st.rerun()
                    else:
                        st.error(res.json().get("detail", "Authentication failed"))
                except requests.RequestException as e:
                    st.error(f"Failed to reach backend: {e}")

    # --- sidebar: location ---
    st.header("Location")
    location = st.session_state.location
    coords = "{:.4f}, {:.4f}".format(location["lat"], location["lng"])
    st.caption(f"📍 {location.get('address') or coords}")

    preset = st.selectbox("Quick pick", ["(none)"] + list(LOCATION_ADDRESSES.keys()))
    address = st.text_input("Or search an address", value="" if preset == "(none)" else LOCATION_ADDRESSES[preset])
    if st.button("Set location") and address:
        try:
            res = api("GET", "/geocode", params={"address": address})
            if res.ok:
                st.session_state.location = dict(res.json(), is_using_device_location=False)
                st.rerun()
            else:
                st.warning("Address not found. Try a more specific one.")
        except requests.RequestException as e:
            st.error(f"Geocoding failed: {e}")

    with st.expander("Enter coordinates"):
        lat = st.number_input("Latitude", value=float(location["lat"]), min_value=-90.0, max_value=90.0, format="%.4f")
        lng = st.number_input("Longitude", value=float(location["lng"]), min_value=-180.0, max_value=180.0, format="%.4f")
        if st.button("Use coordinates"):
            name = None
            try:
                res = api("GET", "/geocode/reverse", params={"lat": lat, "lng": lng, "prefer_locality": True})
                if res.ok:
                    name = res.json().get("address")
            except requests.RequestException:
                pass
            st.session_state.location = {"lat": lat, "lng": lng, "address": name, "is_using_device_location": False}
            st.rerun()

    # --- sidebar: preferences ---
    st.header("Preferences")
    max_distance = st.slider("Show events within (km)", min_value=1, max_value=200, value=50)
    genres = st.multiselect("Genres", AVAILABLE_GENRES, default=AVAILABLE_GENRES)

    # --- sidebar: filters ---
    st.header("Filters")
    search = st.text_input("Search events")
    price = st.selectbox("Price", list(PRICE_OPTIONS), format_func=PRICE_OPTIONS.get)
    date_filter = st.selectbox("Date", list(DATE_OPTIONS), format_func=DATE_OPTIONS.get)


# --- fetch filtered events ---
params = {
    "search": search,
    "price": price,
    "date": date_filter,
    "lat": st.session_state.location["lat"],
    "lng": st.session_state.location["lng"],
    "max_distance": max_distance,
    "genres": genres,
}
if st.session_state.suggested_ids:
    params["suggested"] = st.session_state.suggested_ids

events = []
try:
    res = api("GET", "/events", params=params)
    res.raise_for_status()
    events = res.json()["events"]
except requests.RequestException as e:
    st.error(f"Failed to fetch events: {e}")

map_col, chat_col = st.columns([2, 1])

with map_col:
    if st.session_state.suggested_ids:
        st.info("Showing the assistant's picks. Clear them to go back to your filters.")
        if st.button("Clear AI suggestions"):
            st.session_state.suggested_ids = []
            st.rerun()

    st.subheader(f"{len(events)} events")
    points = [
        {"lat": e["position"]["lat"], "lon": e["position"]["lng"]}
        for e in events
        if e.get("position")
    ]
    points.append({"lat": st.session_state.location["lat"], "lon": st.session_state.location["lng"]})
    st.map(points, zoom=11)

    for event in events:
        with st.container(border=True):
            cols = st.columns([1, 3])
            if event.get("image_url"):
                cols[0].image(event["image_url"])
            with cols[1]:
                st.markdown(f"**{event['title']}**  \n{event.get('category', '')} · {'Free' if event['is_free'] else 'Paid'}")
                when = isoparse(event["date"])
                st.markdown(f"**When:** {when:%a %d %b, %H:%M}")
                if event.get("distance") is not None:
                    st.markdown(f"📍 {event['distance']:.1f} km away")
                st.markdown(event.get("description", ""))
                st.markdown(f"**Organizer:** {event.get('organizer') or 'N/A'}")
                st.markdown(f"**Phone:** {event.get('phone_number') or 'N/A'}")

with chat_col:
    st.subheader("AI Event Assistant")
    for message in st.session_state.messages:
        with st.chat_message("assistant" if message.role == "model" else "user"):
            st.markdown(message.content)

    prompt = st.chat_input("What are you in the mood for today?")
    if prompt:
        st.session_state.messages.append(ChatMessage(role="user", content=prompt))
        try:
            res = api("POST", "/chat", json={"message": prompt})
            res.raise_for_status()
            data = res.json()
            st.session_state.suggested_ids = data["event_ids"]
            reply = data["message"]
            if data["event_ids"]:
                reply += f"\n\nFound {len(data['event_ids'])} event(s) matching your interest! 📍"
        except requests.RequestException:
            st.session_state.suggested_ids = []
            reply = "⚠️ Sorry, something went wrong. Please try again."
        st.session_state.messages.append(
            ChatMessage(role="model", content=reply, suggested_event_ids=st.session_state.suggested_ids)
        )
        st.rerun()


# --- add event / my events ---
if st.session_state.user:
    add_col, mine_col = st.columns(2)

    with add_col:
        with st.expander("Add event"):
            query = st.text_input("Event location", key="new_event_location")
            suggestions = []
            if len(query) >= 2:
                try:
                    suggestions = api("GET", "/geocode/suggest", params={"q": query}).json().get("suggestions", [])
                except requests.RequestException:
                    suggestions = []
            choice = st.selectbox(
                "Pick the exact place",
                suggestions,
                format_func=lambda s: s["display_name"],
                index=None,
            )

            with st.form("add_event_form", clear_on_submit=True):
                title = st.text_input("Title")
                description = st.text_area("Description")
                day = st.date_input("Date")
                hour = st.time_input("Time", value=time(19, 0))
                category = st.selectbox("Category", AVAILABLE_GENRES)
                organizer = st.text_input("Organizer")
                phone = st.text_input("Phone number")
                is_free = st.checkbox("Free event")
                photos = st.text_area("Photo URLs (one per line)")

                if st.form_submit_button("Add event"):
                    if not all([title, description, organizer, phone]) or choice is None:
                        st.warning("Please fill in all required fields, including location and phone number.")
                    else:
                        payload = {
                            "title": title,
                            "description": description,
                            "date": datetime.combine(day, hour).isoformat(),
                            "is_free": is_free,
                            "category": category,
                            "organizer": organizer,
                            "phone_number": phone,
                            "position": {"lat": choice["lat"], "lng": choice["lng"]},
                            "photos": [line.strip() for line in photos.splitlines() if line.strip()],
                        }
                        res = api("POST", "/events", json=payload)
                        if res.status_code == 201:
                            st.success("Event added!")
                        else:
                            st.error(f"Failed to add event: {res.text}")

    with mine_col:
        with st.expander("My events"):
            try:
                mine = api("GET", "/events/mine").json().get("events", [])
            except requests.RequestException as e:
                mine = []
                st.error(f"Failed to load your events: {e}")
            if not mine:
                st.write("You haven't added any events yet.")
            for event in mine:
                st.markdown(f"**{event['title']}** · {event['date'][:16].replace('T', ' ')}")
                when = isoparse(event["date"])
                with st.popover("Edit"):
                    with st.form(f"edit_{event['id']}"):
                        title = st.text_input("Title", value=event["title"], key=f"edit_title_{event['id']}")
                        description = st.text_area("Description", value=event.get("description", ""), key=f"edit_description_{event['id']}")
                        day = st.date_input("Date", value=when.date(), key=f"edit_day_{event['id']}")
                        hour = st.time_input("Time", value=when.time().replace(tzinfo=None), key=f"edit_hour_{event['id']}")
                        category = st.selectbox(
                            "Category",
                            AVAILABLE_GENRES,
                            index=AVAILABLE_GENRES.index(event["category"]) if event.get("category") in AVAILABLE_GENRES else 0,
                            key=f"edit_category_{event['id']}",
                        )
                        organizer = st.text_input("Organizer", value=event.get("organizer", ""), key=f"edit_organizer_{event['id']}")
                        is_free = st.checkbox("Free event", value=event.get("is_free", False), key=f"edit_free_{event['id']}")

                        if st.form_submit_button("Save"):
                            updates = {
                                "title": title,
                                "description": description,
                                "date": datetime.combine(day, hour).isoformat(),
                                "category": category,
                                "organizer": organizer,
                                "is_free": is_free,
                            }
                            res = api("PATCH", f"/events/{event['id']}", json=updates)
                            if res.ok:
                                st.success("Event updated successfully!")
                                st.rerun()
                            else:
                                st.error(f"Failed to update event: {res.text}")
                if st.button("Delete", key=f"delete_{event['id']}"):
                    res = api("DELETE", f"/events/{event['id']}")
                    if res.status_code == 204:
                        st.success("Event deleted successfully!")
                        st.rerun()
                    else:
                        st.error(f"Failed to delete event: {res.text}")
