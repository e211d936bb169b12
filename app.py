from dotenv import load_dotenv
import streamlit as st

from itinerary_export.ai import chat_reply, generate_ai_itinerary
from itinerary_export.config import configure_logging
from itinerary_export.export import ExportFormat, export_itinerary
from itinerary_export.models import resolve_destination

load_dotenv()
configure_logging()

st.set_page_config(page_title="Wander AI", page_icon="🌍", layout="wide")

GREETING = "Hello! I'm Sanchari, your travel companion. Ask me anything about your trip!"


def _init_state() -> None:
    defaults = {
        "destination": "",
        "days": 3,
        "preferences": "",
        "itinerary": None,
        "trip_destination": "",
        "generation_error": None,
        "chat_history": [{"role": "assistant", "content": GREETING}],
        "chat_error": None,
    }
    for key, value in defaults.items():
        st.session_state.setdefault(key, value)


def _reset_form() -> None:
    for key in [
        "destination",
        "days",
        "preferences",
        "itinerary",
        "trip_destination",
        "generation_error",
        "chat_history",
        "chat_error",
    ]:
        st.session_state.pop(key, None)


def _render_itinerary(itinerary, destination: str) -> None:
    st.subheader(f"{destination} itinerary")
    if not itinerary.days:
        st.info("The planner returned no days for this trip.")
        return

    day_tabs = st.tabs([f"Day {day.day}" for day in itinerary.days])
    for tab, day in zip(day_tabs, itinerary.days):
        with tab:
            for activity in day.activities:
                st.markdown(f"**{activity.time}** · {activity.place}")
                if activity.description:
                    st.write(activity.description)
                if activity.recommendations:
                    names = ", ".join(f"{rec.name} ({rec.type})" for rec in activity.recommendations)
                    st.caption(f"Nearby: {names}")


def _render_export(itinerary, destination: str) -> None:
    st.divider()
    st.subheader("Download itinerary")
    fmt = st.radio(
        "Select format",
        list(ExportFormat),
        format_func=lambda option: option.label,
        horizontal=True,
    )

    payload, error = export_itinerary(itinerary, destination, fmt)
    if error:
        st.error(error)
        return
    if payload is None:
        return
    st.download_button(
        label=f"Download {fmt.label}",
        data=payload.data,
        file_name=payload.filename,
        mime=payload.mime_type,
    )


def _render_chat(itinerary) -> None:
    st.divider()
    st.subheader("Ask Sanchari")
    for message in st.session_state["chat_history"]:
        with st.chat_message(message["role"]):
            st.write(message["content"])
    if st.session_state.get("chat_error"):
        st.warning(st.session_state["chat_error"])

    question = st.chat_input("Ask about your trip...")
    if not question:
        return

    st.session_state["chat_history"].append({"role": "user", "content": question})
    with st.spinner("Thinking..."):
        reply, error = chat_reply(question, itinerary)
    st.session_state["chat_history"].append(
        {"role": "assistant", "content": reply or "Sorry, I encountered an error. Please try again."}
    )
    st.session_state["chat_error"] = error
    st.rerun()


def main() -> None:
    _init_state()

    st.title("🌍 Wander AI")
    st.write("Plan a multi-day trip, chat about it, and download it as text, PDF or Word.")

    with st.form(key="planner_form", clear_on_submit=False):
        destination = st.text_input(
            "Destination",
            value=st.session_state["destination"],
            placeholder="Where do you want to go?",
        )
        days = st.number_input(
            "Number of days",
            min_value=1,
            max_value=30,
            value=int(st.session_state["days"]),
        )
        preferences = st.text_area(
            "Preferences",
            value=st.session_state["preferences"],
            placeholder="e.g., museums, street food, slow mornings",
        )
        submitted = st.form_submit_button("Generate itinerary", type="primary")

    _, reset_col = st.columns([3, 1])
    with reset_col:
        st.button("Reset Form", type="secondary", on_click=_reset_form)

    if submitted:
        if not destination.strip():
            st.warning("Please provide a destination to start your plan.")
        else:
            with st.spinner("Asking OpenAI to craft your trip..."):
                result, error = generate_ai_itinerary(destination, int(days), preferences)

            st.session_state["destination"] = destination
            st.session_state["days"] = int(days)
            st.session_state["preferences"] = preferences
            if result:
                itinerary, trip_destination = result
                st.session_state["itinerary"] = itinerary
                st.session_state["trip_destination"] = trip_destination
                st.session_state["generation_error"] = None
                st.success("Itinerary ready. Scroll down to review or download it.")
            else:
                st.session_state["generation_error"] = error or "Failed to generate itinerary."
                st.error(st.session_state["generation_error"])

    itinerary = st.session_state.get("itinerary")
    if itinerary is not None:
        trip_destination = resolve_destination(st.session_state.get("trip_destination"))
        _render_itinerary(itinerary, trip_destination)
        _render_export(itinerary, trip_destination)
        _render_chat(itinerary)
    else:
        st.info("Fill out the form and click Generate itinerary to see your trip here.")


if __name__ == "__main__":
    main()
