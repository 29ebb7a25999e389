# Infrastructure adapters (outbound port implementations)
