"""
Centralized site configuration.
Edit this file to update the page title, intro and footer text displayed on all pages.
"""

SITE_CONFIG = {
    "title": "Free Coin Identifier",
    "tagline": (
        "Upload a coin photo for educational identification and information "
        "about its history and value"
    ),
    # Footer — displayed at the bottom of every page
    "footer_tagline": (
        "Coin descriptions are generated by an AI model for educational purposes only. "
        "They are not an appraisal or an authentication."
    ),
    "footer_model_note": (
        "This project uses free AI models and hosting by default. "
        "Speed and recognition quality may vary."
    ),
}
