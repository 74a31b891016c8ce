"""
Load Layer - Payment Gateway

This layer sends donations to the Omise API.
- Card tokenisation and charge creation
- No business logic, just I/O operations
"""
