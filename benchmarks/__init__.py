"""Benchmarks module - Headless solver benchmarks"""
