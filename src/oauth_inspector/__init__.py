"""
OAuth User Inspector

Server-side token-lifecycle proxy for the OAuth User Inspector: authorization
code exchange, refresh, revocation, hosted-flow bootstrap and an API explore
proxy for GitHub, Google, GitLab, Auth0 and LinkedIn, with OAuth error
classification and troubleshooting guidance.
"""

__version__ = "1.0.0"
