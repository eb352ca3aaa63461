"""Measurement sources"""
