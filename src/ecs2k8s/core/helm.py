"""Helm chart packaging: Chart.yaml, combined values.yaml, ranging templates."""

import yaml

from ecs2k8s.pacts.types import TaskDefInfo, FileSet, Renderer
from ecs2k8s.core.constants import (
    DEFAULT_NAMESPACE, DEFAULT_REPLICAS, DEFAULT_SERVICE_TYPE, IRSA_ANNOTATION, MANAGED_BY,
)
from ecs2k8s.core.identity import select_role_arn
from ecs2k8s.core.services import primary_port
from ecs2k8s.io.validate import validate_cluster_name

# Placeholder replaced with the chart name in every template
_CHART = "__CHART__"

VALUES_HEADER = """\
# Helm chart values - generated by ecs2k8s
#
# One entry under 'services' per converted ECS task definition, holding its
# containers, resources and service configuration.
# Secret values are not stored here: create the '<container>-secret' Secrets
# referenced by 'secretRef' before installing.
#
# Example usage:
#   helm install my-release ./ -f values.yaml
#   helm upgrade my-release ./ -f values.yaml

"""

DEPLOYMENT_TEMPLATE = """\
{{- range $serviceName, $serviceConfig := .Values.services }}
---
apiVersion: apps/v1
kind: Deployment
metadata:
  name: {{ $serviceName }}
  namespace: {{ $serviceConfig.namespace | default $.Values.defaultNamespace }}
  labels:
    app: {{ $serviceName }}
    {{- include "__CHART__.labels" $ | nindent 4 }}
spec:
  replicas: {{ $serviceConfig.replicas | default $.Values.defaultReplicas }}
  selector:
    matchLabels:
      app: {{ $serviceName }}
  template:
    metadata:
      labels:
        app: {{ $serviceName }}
        {{- include "__CHART__.selectorLabels" $ | nindent 8 }}
    spec:
      {{- if $serviceConfig.serviceAccount }}
      serviceAccountName: {{ $serviceConfig.serviceAccount.name | default (printf "%s-sa" $serviceName) }}
      {{- end }}
      containers:
      {{- range $serviceConfig.containers }}
      - name: {{ .name }}
        image: {{ .image }}
        imagePullPolicy: IfNotPresent
        {{- if .ports }}
        ports:
        {{- range .ports }}
        - containerPort: {{ .containerPort }}
          protocol: {{ .protocol | default "TCP" }}
        {{- end }}
        {{- end }}
        {{- if or .env .secretRef }}
        envFrom:
        {{- if .env }}
        - configMapRef:
            name: {{ $serviceName }}-{{ .name }}-config
        {{- end }}
        {{- if .secretRef }}
        - secretRef:
            name: {{ .secretRef }}
        {{- end }}
        {{- end }}
        {{- if .resources }}
        resources:
          {{- toYaml .resources | nindent 10 }}
        {{- end }}
      {{- end }}
{{- end }}
"""

SERVICE_TEMPLATE = """\
{{- range $serviceName, $serviceConfig := .Values.services }}
{{- if $serviceConfig.service }}
---
apiVersion: v1
kind: Service
metadata:
  name: {{ $serviceConfig.service.name | default $serviceName }}
  namespace: {{ $serviceConfig.namespace | default $.Values.defaultNamespace }}
  labels:
    app: {{ $serviceName }}
    {{- include "__CHART__.labels" $ | nindent 4 }}
spec:
  type: {{ $serviceConfig.service.type | default "ClusterIP" }}
  ports:
  {{- range $serviceConfig.containers }}
  {{- range .ports }}
  - name: {{ .protocol | default "TCP" | lower }}-{{ .containerPort }}
    port: {{ .containerPort }}
    targetPort: {{ .containerPort }}
    protocol: {{ .protocol | default "TCP" }}
  {{- end }}
  {{- end }}
  selector:
    app: {{ $serviceName }}
{{- end }}
{{- end }}
"""

CONFIGMAP_TEMPLATE = """\
{{- range $serviceName, $serviceConfig := .Values.services }}
{{- range $serviceConfig.containers }}
{{- if .env }}
---
apiVersion: v1
kind: ConfigMap
metadata:
  name: {{ $serviceName }}-{{ .name }}-config
  namespace: {{ $serviceConfig.namespace | default $.Values.defaultNamespace }}
  labels:
    app: {{ $serviceName }}
    {{- include "__CHART__.labels" $ | nindent 4 }}
data:
  {{- range .env }}
  {{ .name }}: {{ .value | quote }}
  {{- end }}
{{- end }}
{{- end }}
{{- end }}
"""

SERVICEACCOUNT_TEMPLATE = """\
{{- range $serviceName, $serviceConfig := .Values.services }}
{{- if $serviceConfig.serviceAccount }}
---
apiVersion: v1
kind: ServiceAccount
metadata:
  name: {{ $serviceConfig.serviceAccount.name | default (printf "%s-sa" $serviceName) }}
  namespace: {{ $serviceConfig.namespace | default $.Values.defaultNamespace }}
  labels:
    app: {{ $serviceName }}
    {{- include "__CHART__.labels" $ | nindent 4 }}
  {{- if $serviceConfig.serviceAccount.annotations }}
  annotations:
    {{- toYaml $serviceConfig.serviceAccount.annotations | nindent 4 }}
  {{- else if $serviceConfig.iamRoleArn }}
  annotations:
    eks.amazonaws.com/role-arn: {{ $serviceConfig.iamRoleArn }}
  {{- end }}
{{- end }}
{{- end }}
"""

HELPERS_TEMPLATE = """\
{{/*
Expand the name of the chart.
*/}}
{{- define "__CHART__.name" -}}
{{- default .Chart.Name .Values.nameOverride | trunc 63 | trimSuffix "-" }}
{{- end }}

{{/*
Create a default fully qualified app name.
*/}}
{{- define "__CHART__.fullname" -}}
{{- if .Values.fullnameOverride }}
{{- .Values.fullnameOverride | trunc 63 | trimSuffix "-" }}
{{- else }}
{{- $name := default .Chart.Name .Values.nameOverride }}
{{- if contains $name .Release.Name }}
{{- .Release.Name | trunc 63 | trimSuffix "-" }}
{{- else }}
{{- printf "%s-%s" .Release.Name $name | trunc 63 | trimSuffix "-" }}
{{- end }}
{{- end }}
{{- end }}

{{/*
Chart name and version as used by the chart label.
*/}}
{{- define "__CHART__.chart" -}}
{{- printf "%s-%s" .Chart.Name .Chart.Version | replace "+" "_" | trunc 63 | trimSuffix "-" }}
{{- end }}

{{/*
Common labels
*/}}
{{- define "__CHART__.labels" -}}
helm.sh/chart: {{ include "__CHART__.chart" . }}
{{ include "__CHART__.selectorLabels" . }}
{{- if .Chart.AppVersion }}
app.kubernetes.io/version: {{ .Chart.AppVersion | quote }}
{{- end }}
app.kubernetes.io/managed-by: {{ .Release.Service }}
{{- end }}

{{/*
Selector labels
*/}}
{{- define "__CHART__.selectorLabels" -}}
app.kubernetes.io/name: {{ include "__CHART__.name" . }}
app.kubernetes.io/instance: {{ .Release.Name }}
{{- end }}
"""

# templates/<dir>/<file> -> template text
TEMPLATES = {
    "deployment/deployment.yaml": DEPLOYMENT_TEMPLATE,
    "service/service.yaml": SERVICE_TEMPLATE,
    "configmap/configmap.yaml": CONFIGMAP_TEMPLATE,
    "serviceaccount/serviceaccount.yaml": SERVICEACCOUNT_TEMPLATE,
    "_helpers.tpl": HELPERS_TEMPLATE,
}


def chart_yaml(chart_name: str, version: str = "1.0.0") -> dict:
    return {
        "apiVersion": "v2",
        "name": chart_name,
        "description": f"Helm chart for ECS cluster {chart_name} converted from AWS ECS to Kubernetes",
        "type": "application",
        "version": version,
        "appVersion": version,
        "maintainers": [{"name": MANAGED_BY, "email": f"auto-generated@{MANAGED_BY}.local"}],
        "keywords": ["ecs", "kubernetes", "helm", "conversion"],
    }


def _container_values(info: TaskDefInfo) -> list[dict]:
    containers = []
    for c in info.containers:
        entry: dict = {
            "name": c.name,
            "image": c.image,
            "resources": {
                "limits": {"cpu": c.cpu, "memory": c.memory},
                "requests": {"cpu": c.cpu, "memory": c.memory},
            },
        }
        if c.ports:
            entry["ports"] = [dict(p) for p in c.ports]
        if c.env:
            entry["env"] = [{"name": k, "value": v} for k, v in c.env.items()]
        if c.secret_name:
            entry["secretRef"] = c.secret_name
        containers.append(entry)
    return containers


def service_values(info: TaskDefInfo, config: dict) -> dict:
    """values.yaml entry for one task definition."""
    entry: dict = {
        "namespace": config.get("namespace", DEFAULT_NAMESPACE),
        "replicas": config.get("replicas", DEFAULT_REPLICAS),
        "containers": _container_values(info),
    }
    services = info.manifests.services
    if services:
        svc = services[0]
        block: dict = {
            "name": svc["metadata"]["name"],
            "type": svc["spec"].get("type", DEFAULT_SERVICE_TYPE),
        }
        port = primary_port(svc)
        if port is not None:
            block["port"] = port
        entry["service"] = block
    arn = select_role_arn(info.task_role_arn, info.execution_role_arn)
    if arn:
        entry["iamRoleArn"] = arn
    sa = info.manifests.service_account
    if sa:
        sa_block: dict = {"name": sa["metadata"]["name"]}
        if arn:
            sa_block["annotations"] = {IRSA_ANNOTATION: arn}
        entry["serviceAccount"] = sa_block
    return entry


def values_yaml(infos: list[TaskDefInfo], config: dict) -> dict:
    return {
        "defaultNamespace": config.get("namespace", DEFAULT_NAMESPACE),
        "defaultReplicas": config.get("replicas", DEFAULT_REPLICAS),
        "services": {info.name: service_values(info, config) for info in infos},
    }


class HelmRenderer(Renderer):
    """Helm chart under helm/<chart>/ covering every converted task definition."""
    name = "helm"

    def __init__(self, chart_name: str, config: dict | None = None):
        self.chart_name = validate_cluster_name(chart_name)
        self.config = config or {}

    def render(self, infos: list[TaskDefInfo]) -> FileSet:
        root = f"helm/{self.chart_name}"
        files: FileSet = {
            f"{root}/Chart.yaml": yaml.dump(
                chart_yaml(self.chart_name, str(self.config.get("chart_version", "1.0.0"))),
                default_flow_style=False, sort_keys=False),
            f"{root}/values.yaml": VALUES_HEADER + yaml.dump(
                values_yaml(infos, self.config), default_flow_style=False, sort_keys=False),
        }
        for rel, text in TEMPLATES.items():
            files[f"{root}/templates/{rel}"] = text.replace(_CHART, self.chart_name)
        return files
