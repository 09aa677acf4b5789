"""Default values for provisioner options."""

DEFAULT_COMMAND = "itamae"

DEFAULT_STAGING_DIR = "/tmp/packer-itamae"

DEFAULT_GEMS = ("itamae",)

DEFAULT_INSTALL_RETRY_TIMEOUT = 5 * 60.0

DEFAULT_INSTALL_COMMAND = (
    "{% if sudo %}sudo -E {% endif %}"
    "gem install --quiet --no-document --no-suggestions {{ gems }}"
)

DEFAULT_EXECUTE_COMMAND = (
    "cd {{ staging_directory }} && "
    "{{ vars }} {% if sudo %}sudo -E {% endif %}"
    "{{ command }} local --detailed-exitcode "
    "--color='{{ 'true' if color else 'false' }}' "
    "{% if log_level %}--log-level='{{ log_level }}' {% endif %}"
    "{% if shell %}--shell='{{ shell }}' {% endif %}"
    "{% if node_json %}--node-json='{{ node_json }}' {% endif %}"
    "{% if node_yaml %}--node-yaml='{{ node_yaml }}' {% endif %}"
    "{% if config_file %}--config='{{ config_file }}' {% endif %}"
    "{% if extra_arguments %}{{ extra_arguments }} {% endif %}"
    "{{ recipes }}"
)
