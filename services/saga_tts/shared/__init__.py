"""Configuration, constants, errors and API schemas shared across the relay"""
