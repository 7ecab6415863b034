"""Cloud providers that apply provisioning descriptors."""
