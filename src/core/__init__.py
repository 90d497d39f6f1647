"""Wayfarer Core: 전투 / 이동 / 탐색 시뮬레이션"""
__version__ = "0.1.0"
