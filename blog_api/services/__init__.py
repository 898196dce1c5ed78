# Services package.
#
# Each module exposes a service class holding the business rules for a
# single domain aggregate on top of its repository:
#
#   blog_service     - timestamp stamping, tag normalisation and
#                      not-found decisions for Blog
#
# Services receive their repository through the constructor so that the
# router layer (via ``dependencies.py``) decides which implementation and
# which AsyncSession are used.
