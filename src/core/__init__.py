"""Core - 설정, 로깅, 예외, 진단."""
