import logging

import streamlit as st

from chat_ui import config
from chat_ui.api_client import AuthClient
from chat_ui.errors import GatewayError, TransportError
from chat_ui.llm_gemini import complete
from chat_ui.session import EXPIRED, ChatSession
from chat_ui.transcript import TranscriptStore

logging.basicConfig(level=config.LOG_LEVEL)

client = AuthClient(config.API_URL)
store = TranscriptStore(config.TRANSCRIPT_PATH)

# ---- persistent session state ----
if "chat" not in st.session_state:
    st.session_state["chat"] = ChatSession(transcript=store.load())
if "auth_error" not in st.session_state:
    st.session_state["auth_error"] = ""
if "show_login" not in st.session_state:
    st.session_state["show_login"] = True

chat: ChatSession = st.session_state["chat"]

st.set_page_config(page_title="Chat AI", layout="centered")

if chat.context.status == EXPIRED:
    chat.logout()
    st.session_state["auth_error"] = "Your session has expired. Please log in again."


def submit_auth(is_login: bool):
    st.session_state["auth_error"] = ""
    email = st.session_state.get("cred_email", "")
    password = st.session_state.get("cred_password", "")
    try:
        if is_login:
            data = client.login(email, password)
            chat.sign_in(data["token"], data["user"])
        else:
            client.register(st.session_state.get("cred_username", ""), email, password)
            st.session_state["show_login"] = True
    except GatewayError as e:
        st.session_state["auth_error"] = e.message
    except TransportError:
        st.session_state["auth_error"] = f"Cannot connect to the server. Please ensure it's running on {config.API_URL}."


# ---- login / register ----
if not chat.authenticated:
    is_login = st.session_state["show_login"]
    st.title("Login" if is_login else "Register")
    if st.session_state["auth_error"]:
        st.error(st.session_state["auth_error"])

    with st.form("auth_form", clear_on_submit=True):
        if not is_login:
            st.text_input("Username", key="cred_username")
        st.text_input("Email", key="cred_email")
        st.text_input("Password", type="password", key="cred_password")
        st.form_submit_button("Login" if is_login else "Register", on_click=submit_auth, args=(is_login,))

    if st.button("Need to register?" if is_login else "Already have an account?"):
        st.session_state["show_login"] = not is_login
        st.session_state["auth_error"] = ""
        st.rerun()
    st.stop()


# ---- chat ----
head, logout_col = st.columns([4, 1])
with head:
    st.title("Chat AI")
with logout_col:
    if st.button("Logout"):
        chat.logout()
        st.rerun()

if not chat.transcript:
    username = (chat.context.user or {}).get("username", "")
    st.subheader(f"Welcome to Chat AI, {username}! 👋")
    st.write("I'm here to help you with anything you'd like to know about universities. Ask me anything!")

for turn in chat.transcript:
    with st.chat_message("user" if turn.role == "question" else "assistant"):
        st.markdown(turn.text)

question = st.chat_input("Ask anything about universities...", disabled=chat.awaiting_response)
if question and chat.authenticated and not chat.awaiting_response:
    with st.chat_message("user"):
        st.markdown(question)
    with st.chat_message("assistant"):
        with st.spinner("Thinking..."):
            # ask() resolves or rolls back before returning; no st.* call runs in between
            answer = chat.ask(question, complete)
            if answer is not None:
                store.save(chat.confirmed_turns())
        if answer is not None:
            st.markdown(answer)
