"""Clinic billing application.

Models for the staff directory, service catalog and taxes, and the
transactional writers that book appointments, bill services and record
payments, exposed through Django REST framework views.
"""
