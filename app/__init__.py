"""Default attachment requirements API and tenant schema provisioning."""
