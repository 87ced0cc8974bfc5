"""SonarQube / SonarCloud web API access.

Split into:
  - api.py   : all HTTP calls
  - types.py : small shared data structures

sonar_autobind.bindings is the only caller; it turns a configured connection
into a SonarConfig and lets the user pick one of the returned projects.
"""
