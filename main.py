"""
Email Validator
Main Streamlit application entry point
"""

import logging

import streamlit as st
from ui.streamlit_ui import EmailValidatorUI


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    st.set_page_config(
        page_title="Email Validator",
        page_icon="📧",
        layout="wide",
        initial_sidebar_state="collapsed"
    )

    # Initialize and run the UI
    ui = EmailValidatorUI({'typo_maps_path': 'config/typo_maps.json'})
    ui.run()

if __name__ == "__main__":
    main()
