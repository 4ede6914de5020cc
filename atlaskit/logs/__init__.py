"""Structured JSON logging and a per-call log-level interceptor."""