# src/atlas_profiles/core/__init__.py
"""
Core do Atlas Profiles.

Componentes transversais usados pela store de perfis:
    - config     → settings (defaults + override local, deep-merge, hashing)
    - errors     → payload canônico de erro e catálogo de códigos
    - exceptions → exceções tipadas da store e do resolver de ativação

Limites explícitos:
    - Não contém a lógica de CRUD de perfis (ver `atlas_profiles.profiles`)
    - Não realiza I/O de arquivos de perfil (ver `atlas_profiles.persistence`)
"""
