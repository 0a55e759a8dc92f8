"""Interfaces/abstracciones del Core.

Contratos (Protocol) que implementa el código de usuario, p.ej. los
callbacks del reconocimiento por WebSocket.
"""
