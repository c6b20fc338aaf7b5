"""
Pipeline stages for StoreLens.

Contains every stage that processes reviews through the pipeline:
- Ingestion Agent
- Record Normalizer
- Sentiment Scorer
- Feature Assembler & Standardizer
- PCA Engine
- Geospatial Scaler
"""
