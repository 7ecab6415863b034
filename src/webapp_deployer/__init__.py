"""
Provisioning descriptor and deployer for the hosted chat web application.

Builds the desired state of the App Service Plan, App Service, Log Analytics
workspace and diagnostic setting that host the chat app, and references the
pre-existing Azure OpenAI account it talks to.
"""

__version__ = "1.0.0"
