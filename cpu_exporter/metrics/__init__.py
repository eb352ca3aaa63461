"""Metric models, registry and exporters"""
