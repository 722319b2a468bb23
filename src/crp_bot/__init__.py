"""crp-bot: Slack modal workflow for publishing A/B test variations to GitHub.

Users run the `/crp` slash command and walk through a short sequence of modal
dialogs that create or update JS/CSS variation files in a client's GitHub
repository. See `crp-bot --help` for how to start the server.
"""
